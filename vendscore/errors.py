"""Exception types raised by the scoring core."""
from typing import List, Optional


class VendScoreError(Exception):
    """Base class for scoring errors."""


class ValidationError(VendScoreError, ValueError):
    """Business-rule violations found by a validate-before-save pass."""
    
    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__("; ".join(self.errors) or "validation failed")


class UnknownMetricError(VendScoreError, KeyError):
    """A metric or field key that the target category does not define."""
    
    def __init__(self, key: str, category: str):
        self.key = key
        self.category = category
        super().__init__(f"{key!r} is not a metric of {category}")
    
    def __str__(self):
        return self.args[0]


class ModuleTypeMismatchError(VendScoreError, ValueError):
    """Module category does not match the location's declared module type."""
