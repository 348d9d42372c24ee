# Path: codelist_sync/process/models/hierarchy.py
"""
Multi-Level Hierarchy Model

Parent -> children groupings of value labels detected on one
spreadsheet sheet. Keys and children are normalized labels
(trimmed, whitespace collapsed, lower case).
"""

from dataclasses import dataclass, field
from typing import Optional

from ...constants import UNDEFINED_NAME


EdgeMap = dict[str, set[str]]


@dataclass
class MultiLevelHierarchy:
    """
    Ordered edge maps between adjacent hierarchy levels.

    edges_per_level[i] maps a parent at level i to its children at
    level i + 1. Parent keys keep insertion (row) order.

    Attributes:
        edges_per_level: One edge map per adjacent pair of levels
        level_count: Number of level columns detected
        display_names: Normalized label -> label as first written in the sheet
    """
    edges_per_level: list[EdgeMap] = field(default_factory=list)
    level_count: int = 0
    display_names: dict[str, str] = field(default_factory=dict)

    @property
    def deepest_pair(self) -> EdgeMap:
        """Edge map between the two deepest levels (empty when none)."""
        if not self.edges_per_level:
            return {}
        return self.edges_per_level[-1]

    @property
    def is_empty(self) -> bool:
        return not self.deepest_pair

    def add_edge(
        self,
        level: int,
        parent: str,
        child: str,
        parent_label: Optional[str] = None,
        child_label: Optional[str] = None
    ) -> None:
        """
        Record parent -> child at the given level pair.

        parent and child must already be normalized. Blank names are
        stored as 'undefined'. Missing levels up to the requested one
        are created. The optional labels keep the sheet spelling for
        display_name().
        """
        while len(self.edges_per_level) <= level:
            self.edges_per_level.append({})
        parent = parent or UNDEFINED_NAME
        child = child or UNDEFINED_NAME
        self.edges_per_level[level].setdefault(parent, set()).add(child)
        if parent_label:
            self.display_names.setdefault(parent, parent_label)
        if child_label:
            self.display_names.setdefault(child, child_label)

    def display_name(self, key: str) -> str:
        """Sheet spelling of a normalized label (the key itself when unknown)."""
        return self.display_names.get(key, key)

    @property
    def total_parents(self) -> int:
        return sum(len(edge_map) for edge_map in self.edges_per_level)

    @property
    def total_children(self) -> int:
        return sum(
            len(children)
            for edge_map in self.edges_per_level
            for children in edge_map.values()
        )


__all__ = ['EdgeMap', 'MultiLevelHierarchy']
