# Path: codelist_sync/process/enum_value/candidate_resolver.py
"""
Candidate Resolver

Chooses the Target EnumEnum a code list entry links to.

Resolution order:
1. No Target value with the label's name: create one
2. Exactly one: adopt it
3. Several: keep those contained in a Target list named like the
   label's hierarchy parent, then apply the tie-break policy to what
   remains (all candidates when nothing matched the parent)

Any tie-break is a fallback: it is logged and reported in the
resolution method.
"""

from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ...constants import (
    TARGET_LIST_TAG,
    TARGET_VALUE_TAG,
    RelationDef,
    TieBreakPolicy,
)
from ...core.logger.ipo_logging import get_process_logger, log_success
from ..hierarchy.lookup import eq_name
from ..models.codelist import CodeEntry
from ..store.document_store import DocumentStore
from ..store.elements import build_target_value, object_name, object_uid, relation_triple
from ..store.placement import TARGET_VALUE_PLACEMENT
from ..store.uid_generator import UidGenerator


@dataclass
class CandidateResolution:
    """
    Selected Target value.

    Attributes:
        uid: Selected (or created) EnumEnum UID
        candidate_count: Target values whose name matched the label
        method: How the value was chosen (e.g., 'single_match')
        created: Whether a new EnumEnum was created
        fallback: Whether a tie-break decided the result
    """
    uid: str
    candidate_count: int
    method: str
    created: bool = False
    fallback: bool = False


def apply_tie_break(
    nodes: list[etree._Element],
    policy: TieBreakPolicy
) -> tuple[etree._Element, str]:
    """
    Pick one node from equally good candidates.

    Args:
        nodes: Candidates in search order (must not be empty)
        policy: Tie-break policy

    Returns:
        Tuple of (selected node, method used)

    Raises:
        ValueError: If nodes is empty
    """
    if not nodes:
        raise ValueError("No candidates to resolve")

    if len(nodes) == 1:
        return nodes[0], "single_match"

    if policy == TieBreakPolicy.LOWEST_UID:
        return min(nodes, key=lambda node: object_uid(node) or ''), "lowest_uid"

    return nodes[0], "first_found"


class CandidateResolver:
    """
    Resolves code list entries to Target values.

    Args:
        target_store: SPF document store
        uid_generator: Source of UIDs for created values
        policy: Tie-break policy for ambiguous matches

    Example:
        resolver = CandidateResolver(target_store, UidGenerator())
        resolution = resolver.resolve(entry, parent_name='fluidsystems')
        resolution.uid  # "{...}"
    """

    def __init__(
        self,
        target_store: DocumentStore,
        uid_generator: UidGenerator,
        policy: TieBreakPolicy = TieBreakPolicy.LOWEST_UID
    ):
        self.target_store = target_store
        self.uid_generator = uid_generator
        self.policy = policy
        self.logger = get_process_logger('enum_value.resolver')

    def count_candidates(self, label: str) -> int:
        return len(self.target_store.find_by_name(TARGET_VALUE_TAG, label))

    def resolve(self, entry: CodeEntry, parent_name: Optional[str] = None) -> CandidateResolution:
        """
        Resolve one entry to a Target value UID.

        Args:
            entry: Code list entry (its raw short label is the search key)
            parent_name: Immediate hierarchy parent of the label, if known

        Returns:
            CandidateResolution
        """
        candidates = self.target_store.find_by_name(TARGET_VALUE_TAG, entry.short)

        if not candidates:
            uid = self._create_value(entry)
            return CandidateResolution(uid=uid, candidate_count=0, method='created', created=True)

        if len(candidates) == 1:
            return CandidateResolution(
                uid=object_uid(candidates[0]),
                candidate_count=1,
                method='single_match',
            )

        return self._disambiguate(entry, candidates, parent_name)

    def containing_list_names(self, value_uid: str) -> list[str]:
        """Names of Target lists holding a Contains relation to the value."""
        names = []
        for rel in self.target_store.find_relations_to(value_uid, RelationDef.CONTAINS.value):
            list_uid, _, _ = relation_triple(rel)
            target_list = self.target_store.find_by_uid(TARGET_LIST_TAG, list_uid)
            if target_list is not None:
                names.append(object_name(target_list) or '')
        return names

    def _disambiguate(
        self,
        entry: CodeEntry,
        candidates: list[etree._Element],
        parent_name: Optional[str]
    ) -> CandidateResolution:
        if parent_name:
            under_parent = [
                node for node in candidates
                if any(
                    eq_name(list_name, parent_name)
                    for list_name in self.containing_list_names(object_uid(node))
                )
            ]
        else:
            under_parent = []

        if len(under_parent) == 1:
            self.logger.info(
                f"'{entry.short}': {len(candidates)} candidates, "
                f"one contained in '{parent_name}'"
            )
            return CandidateResolution(
                uid=object_uid(under_parent[0]),
                candidate_count=len(candidates),
                method='hierarchy_parent',
            )

        if under_parent:
            pool, prefix = under_parent, 'hierarchy_parent'
        elif parent_name:
            pool, prefix = candidates, 'no_parent_match'
        else:
            pool, prefix = candidates, 'no_hierarchy'

        selected, tie_method = apply_tie_break(pool, self.policy)
        uid = object_uid(selected)
        method = f"{prefix}+{tie_method}"

        self.logger.warning(
            f"'{entry.short}': {len(candidates)} Target values match "
            f"(parent={parent_name or '(none)'}, {len(pool)} in pool); "
            f"tie-break {tie_method} selected UID={uid}"
        )
        return CandidateResolution(
            uid=uid,
            candidate_count=len(candidates),
            method=method,
            fallback=True,
        )

    def _create_value(self, entry: CodeEntry) -> str:
        uid = self.uid_generator.new_uid()
        self.target_store.insert(
            build_target_value(uid, entry.short, entry.number, entry.long),
            TARGET_VALUE_PLACEMENT,
        )
        log_success(
            self.logger,
            f"Created SPF EnumEnum: UID={uid}, Name='{entry.short}', EnumNumber={entry.number}"
        )
        return uid


__all__ = ['CandidateResolution', 'CandidateResolver', 'apply_tie_break']
