"""Fuzzy field-name matching utilities."""
import re
from typing import Dict, List, Optional
from rapidfuzz import fuzz


def normalize_label(label: str) -> str:
    """Uppercase a label and treat underscores, dashes and slashes as spaces."""
    cleaned = re.sub(r'[_\-/]+', ' ', str(label)).upper()
    return re.sub(r'\s+', ' ', cleaned).strip()


def find_label_match(
    target: str,
    candidate_labels: List[str],
    threshold: float = 88.0
) -> Optional[str]:
    """
    Find the best matching label using fuzzy string matching.
    
    Args:
        target: The label to match
        candidate_labels: Labels actually present in the input
        threshold: Minimum similarity score (0-100)
    
    Returns:
        Best matching label or None if below threshold
    """
    if not candidate_labels:
        return None
    
    best_match = None
    best_score = 0.0
    normalized_target = normalize_label(target)
    
    for label in candidate_labels:
        score = fuzz.ratio(normalized_target, normalize_label(label))
        if score > best_score:
            best_score = score
            best_match = label
    
    if best_score >= threshold:
        return best_match
    return None


def map_labels(
    expected_labels: Dict[str, List[str]],
    actual_labels: List[str],
    threshold: float = 88.0
) -> Dict[str, str]:
    """
    Map canonical field names to labels present in the input.
    
    Args:
        expected_labels: Canonical name -> accepted label variants
        actual_labels: Labels found in the input record
        threshold: Minimum similarity score for fuzzy matching
    
    Returns:
        Dict mapping canonical names to actual labels (unmatched names omitted)
    """
    mapping = {}
    used_labels = set()
    
    # First pass: exact matches after normalization
    for canonical, variants in expected_labels.items():
        wanted = {normalize_label(v) for v in variants}
        for actual in actual_labels:
            if actual not in used_labels and normalize_label(actual) in wanted:
                mapping[canonical] = actual
                used_labels.add(actual)
                break
    
    # Second pass: fuzzy matches for unmapped names
    for canonical, variants in expected_labels.items():
        if canonical in mapping:
            continue
        remaining = [a for a in actual_labels if a not in used_labels]
        for variant in variants:
            match = find_label_match(variant, remaining, threshold)
            if match:
                mapping[canonical] = match
                used_labels.add(match)
                break
    
    return mapping
