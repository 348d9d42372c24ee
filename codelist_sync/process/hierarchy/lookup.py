# Path: codelist_sync/process/hierarchy/lookup.py
"""
Hierarchy Lookup

Name normalization and parent lookup over the deepest edge map of a
MultiLevelHierarchy.

All comparisons use the same normalization: trim, collapse interior
whitespace to one space, lower case. eq_name() is therefore an
equivalence relation insensitive to case and whitespace.
"""

from typing import Optional

from ...core.logger.ipo_logging import get_process_logger
from ..models.hierarchy import MultiLevelHierarchy


logger = get_process_logger('hierarchy_lookup')


def normalize_name(value: Optional[str]) -> str:
    """
    Normalize a label for comparison.

    Args:
        value: Raw label (None is treated as empty)

    Returns:
        Trimmed, whitespace-collapsed, lower-case label

    Example:
        normalize_name("  Foam   Type")  # "foam type"
    """
    return ' '.join((value or '').split()).lower()


def eq_name(left: Optional[str], right: Optional[str]) -> bool:
    """Case and whitespace insensitive name equality."""
    return normalize_name(left) == normalize_name(right)


def find_parents(
    hierarchy: Optional[MultiLevelHierarchy],
    label: Optional[str]
) -> list[str]:
    """
    Find every parent of a label in the deepest edge map.

    Args:
        hierarchy: Hierarchy of one grouping (None when unavailable)
        label: Value label to look up

    Returns:
        Normalized parent keys in edge-map insertion order
    """
    if hierarchy is None:
        return []

    key = normalize_name(label)
    return [
        parent
        for parent, children in hierarchy.deepest_pair.items()
        if key in children
    ]


def find_immediate_parent(
    hierarchy: Optional[MultiLevelHierarchy],
    label: Optional[str]
) -> Optional[str]:
    """
    Find the immediate parent of a label.

    The first parent in edge-map insertion order (spreadsheet row
    order) wins. A warning is logged when the label sits under
    several parents.

    Args:
        hierarchy: Hierarchy of one grouping (None when unavailable)
        label: Value label to look up

    Returns:
        Normalized parent name, or None when the label has no parent
    """
    parents = find_parents(hierarchy, label)
    if not parents:
        return None

    if len(parents) > 1:
        logger.warning(
            f"Label '{label}' has {len(parents)} parents in hierarchy "
            f"({', '.join(parents)}); using '{parents[0]}'"
        )

    return parents[0]


__all__ = [
    'normalize_name',
    'eq_name',
    'find_parents',
    'find_immediate_parent',
]
