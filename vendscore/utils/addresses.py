"""Address normalization utilities."""
import re
from typing import Optional
import usaddress


def normalize_address(address: Optional[str]) -> str:
    """
    Collapse whitespace and stray separators in a free-form address.
    
    Args:
        address: Address as typed by the user
    
    Returns:
        Normalized address string (empty when address is None)
    """
    if not address:
        return ""
    
    normalized = re.sub(r'\s+', ' ', address).strip()
    normalized = re.sub(r'\s*,\s*', ', ', normalized)
    return normalized.strip(', ')


def parse_address(address: str) -> dict:
    """
    Parse address using usaddress library.
    
    Args:
        address: Address string to parse
    
    Returns:
        Dict with parsed components (empty when the address is ambiguous)
    """
    if not address:
        return {}
    try:
        parsed, _ = usaddress.tag(address)
        return dict(parsed)
    except usaddress.RepeatedLabelError:
        return {}


def has_street_line(address: str) -> bool:
    """True when the address parses into a street number and street name."""
    parsed = parse_address(address)
    return bool(parsed.get("AddressNumber")) and bool(parsed.get("StreetName"))
