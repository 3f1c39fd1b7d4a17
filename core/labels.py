"""
Core Module - Label Merging.

Combines several label sets into the single constant label set
attached to a metric sample. Later sets override earlier ones, so
group specific labels always win over configured defaults.
"""

from typing import Dict, Mapping, Optional


def merge_labels(*label_sets: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Merge label sets, last write wins.

    Args:
        label_sets: Label mappings in increasing precedence

    Returns:
        New dictionary; inputs are never modified
    """
    merged: Dict[str, str] = {}
    for labels in label_sets:
        if labels:
            merged.update(labels)
    return merged


__all__ = ["merge_labels"]
