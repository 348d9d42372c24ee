# Path: codelist_sync/process/enum_value/value_service.py
"""
EnumValue Reconciliation Engine

Per code list entry, in order:
    A. Map value node (SPMapEnumDef) with deterministic UID
    B. Map relation list -> value (MapEnumListMapEnum)
    C. Cross link Map value -> Target value (MapEnumToEnum), resolving
       or creating the Target EnumEnum
    D. Target containment list -> value (Contains) from the grouping
       hierarchy

Every step checks before it creates, so a second run over the same
inputs changes nothing.
"""

from typing import Optional

from ...constants import (
    MAP_VALUE_TAG,
    TARGET_LIST_TAG,
    TARGET_VALUE_TAG,
    LIST_HAS_VALUE_REL_FORMAT,
    VALUE_TO_VALUE_REL_FORMAT,
    UNDEFINED_NAME,
    OpStatus,
    RelationDef,
    SkipReason,
    TieBreakPolicy,
    map_value_uid,
)
from ...core.logger.ipo_logging import get_process_logger, log_success
from ..hierarchy.lookup import eq_name, find_immediate_parent
from ..models.codelist import CodeEntry, CodeList
from ..models.hierarchy import MultiLevelHierarchy
from ..models.outcomes import EntryOutcome
from ..store.document_store import DocumentStore
from ..store.elements import (
    build_map_value,
    build_relation,
    build_target_list,
    object_name,
    object_uid,
    relation_triple,
)
from ..store.placement import (
    MAP_VALUE_PLACEMENT,
    RELATION_PLACEMENT,
    TARGET_LIST_PLACEMENT,
)
from ..store.uid_generator import UidGenerator
from .candidate_resolver import CandidateResolution, CandidateResolver, apply_tie_break


class EnumValueService:
    """
    Reconciles code list values across the Map and Target stores.

    Args:
        map_store: ToolMap document store
        target_store: SPF document store
        uid_generator: Source of opaque Target UIDs
        policy: Tie-break policy for ambiguous name matches

    Example:
        service = EnumValueService(map_store, target_store, UidGenerator())
        outcomes = service.reconcile(
            code_list,
            enum_to_sheet={35: 'Status'},
            hierarchies={'Status': hierarchy},
        )
    """

    def __init__(
        self,
        map_store: DocumentStore,
        target_store: DocumentStore,
        uid_generator: UidGenerator,
        policy: TieBreakPolicy = TieBreakPolicy.LOWEST_UID
    ):
        self.map_store = map_store
        self.target_store = target_store
        self.uid_generator = uid_generator
        self.policy = policy
        self.resolver = CandidateResolver(target_store, uid_generator, policy)
        self.logger = get_process_logger('enum_value.service')

    def reconcile(
        self,
        code_list: CodeList,
        enum_to_sheet: Optional[dict[int, str]] = None,
        hierarchies: Optional[dict[str, MultiLevelHierarchy]] = None
    ) -> list[EntryOutcome]:
        """
        Reconcile every entry of one code list.

        Args:
            code_list: Parsed code list
            enum_to_sheet: Enum number -> grouping (sheet) name
            hierarchies: Grouping name -> hierarchy (case-insensitive lookup)

        Returns:
            One EntryOutcome per entry, in entry order

        Raises:
            DocumentStructureError: If either store has no root
        """
        self.map_store.require_root()
        self.target_store.require_root()

        list_uid = code_list.list_uid
        grouping = (enum_to_sheet or {}).get(code_list.enum_number)
        hierarchy = _lookup_hierarchy(hierarchies, grouping)

        self.logger.info(
            f"EnumList {list_uid} '{code_list.name or ''}': processing "
            f"{len(code_list)} value(s), grouping={grouping or '(none)'}"
            f"{'' if hierarchy is not None else ', no hierarchy'}"
        )

        outcomes = []
        for entry in code_list.entries.values():
            outcome = self._reconcile_entry(list_uid, entry, grouping, hierarchy)
            self._log_outcome(outcome)
            outcomes.append(outcome)

        return outcomes

    # ------------------------------------------------------------------
    # Per entry
    # ------------------------------------------------------------------

    def _reconcile_entry(
        self,
        list_uid: str,
        entry: CodeEntry,
        grouping: Optional[str],
        hierarchy: Optional[MultiLevelHierarchy]
    ) -> EntryOutcome:
        value_uid = map_value_uid(list_uid, entry.number)
        parent_name = find_immediate_parent(hierarchy, entry.short)

        outcome = EntryOutcome(
            list_uid=list_uid,
            value_number=entry.number,
            short_label=entry.short,
            grouping_name=grouping,
            parent_name=parent_name,
        )

        outcome.map_value = self.ensure_map_value(value_uid, entry)
        outcome.parent_relation = self.ensure_list_value_relation(list_uid, value_uid, entry.number)
        self.ensure_cross_relation(value_uid, entry, parent_name, outcome)
        self.ensure_containment(entry, grouping, hierarchy, parent_name, outcome)

        return outcome

    def ensure_map_value(self, value_uid: str, entry: CodeEntry) -> OpStatus:
        """Step A: SPMapEnumDef with the deterministic value UID."""
        if self.map_store.find_by_uid(MAP_VALUE_TAG, value_uid) is not None:
            return OpStatus.EXISTS

        name = entry.short if entry.short.strip() else UNDEFINED_NAME
        self.map_store.insert(build_map_value(value_uid, name, entry.number), MAP_VALUE_PLACEMENT)
        return OpStatus.CREATED

    def ensure_list_value_relation(
        self,
        list_uid: str,
        value_uid: str,
        value_number: int
    ) -> OpStatus:
        """Step B: MapEnumListMapEnum relation list -> value."""
        def_uid = RelationDef.LIST_HAS_VALUE.value
        if self.map_store.has_relation(list_uid, value_uid, def_uid):
            return OpStatus.EXISTS

        rel_uid = LIST_HAS_VALUE_REL_FORMAT.format(list_uid=list_uid, value_number=value_number)
        self.map_store.insert(
            build_relation(rel_uid, list_uid, value_uid, def_uid),
            RELATION_PLACEMENT,
        )
        return OpStatus.CREATED

    def ensure_cross_relation(
        self,
        value_uid: str,
        entry: CodeEntry,
        parent_name: Optional[str],
        outcome: EntryOutcome
    ) -> None:
        """
        Step C: MapEnumToEnum relation Map value -> Target value.

        Fills target_value, cross_relation, target_uid, candidate_count
        and resolution on the outcome.
        """
        def_uid = RelationDef.VALUE_TO_VALUE.value
        rel = self.map_store.find_relation(value_uid, def_uid)

        if rel is None:
            resolution = self.resolver.resolve(entry, parent_name)
            rel_uid = VALUE_TO_VALUE_REL_FORMAT.format(value_uid=value_uid)
            self.map_store.insert(
                build_relation(rel_uid, value_uid, resolution.uid, def_uid),
                RELATION_PLACEMENT,
            )
            self._apply_resolution(outcome, resolution)
            outcome.cross_relation = OpStatus.CREATED
            return

        _, current_uid2, _ = relation_triple(rel)
        if not current_uid2.strip():
            self.logger.error(
                f"Cross relation {object_uid(rel)} for {value_uid} has an empty UID2; "
                f"skipping link and containment"
            )
            outcome.cross_relation = OpStatus.SKIPPED
            outcome.skip_reason = SkipReason.BLANK_RELATION_TARGET
            return

        target_value = self.target_store.find_by_uid(TARGET_VALUE_TAG, current_uid2)
        if target_value is not None and eq_name(object_name(target_value), entry.short):
            outcome.target_value = OpStatus.EXISTS
            outcome.cross_relation = OpStatus.EXISTS
            outcome.target_uid = current_uid2
            outcome.candidate_count = self.resolver.count_candidates(entry.short)
            outcome.resolution = 'confirmed'
            return

        if target_value is None:
            self.logger.warning(
                f"Cross relation for {value_uid} points at missing EnumEnum UID={current_uid2}"
            )
        else:
            self.logger.warning(
                f"Cross relation for {value_uid} points at '{object_name(target_value)}' "
                f"(UID={current_uid2}), expected '{entry.short}'"
            )

        resolution = self.resolver.resolve(entry, parent_name)
        self._apply_resolution(outcome, resolution)

        if resolution.uid == current_uid2:
            outcome.cross_relation = OpStatus.EXISTS
        elif self.map_store.has_relation(value_uid, resolution.uid, def_uid):
            self.logger.warning(
                f"{value_uid} already has a relation to UID={resolution.uid}; "
                f"leaving {object_uid(rel)} unchanged"
            )
            outcome.cross_relation = OpStatus.EXISTS
        elif self.map_store.retarget_relation(rel, resolution.uid):
            outcome.cross_relation = OpStatus.UPDATED
        else:
            outcome.cross_relation = OpStatus.EXISTS

    def ensure_containment(
        self,
        entry: CodeEntry,
        grouping: Optional[str],
        hierarchy: Optional[MultiLevelHierarchy],
        parent_name: Optional[str],
        outcome: EntryOutcome
    ) -> None:
        """
        Step D: Contains relation Target list (named like the hierarchy
        parent) -> Target value. Target store only.
        """
        if outcome.skip_reason is not None:
            return
        if grouping is None or hierarchy is None or hierarchy.is_empty:
            outcome.skip_reason = SkipReason.NO_HIERARCHY_DATA
            return
        if parent_name is None:
            outcome.skip_reason = SkipReason.NO_PARENT_IN_HIERARCHY
            return
        if not outcome.target_uid:
            outcome.skip_reason = SkipReason.NO_RESOLVED_VALUE
            return

        list_uid = self._ensure_parent_list(hierarchy.display_name(parent_name))
        def_uid = RelationDef.CONTAINS.value

        if self.target_store.has_relation(list_uid, outcome.target_uid, def_uid):
            outcome.containment = OpStatus.EXISTS
            return

        self.target_store.insert(
            build_relation(self.uid_generator.new_uid(), list_uid, outcome.target_uid, def_uid),
            RELATION_PLACEMENT,
        )
        outcome.containment = OpStatus.CREATED

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_parent_list(self, parent_label: str) -> str:
        """Return the UID of the Target list named like the parent, creating it if needed."""
        lists = self.target_store.find_by_name(TARGET_LIST_TAG, parent_label)
        if lists:
            selected, method = apply_tie_break(lists, self.policy)
            if len(lists) > 1:
                self.logger.warning(
                    f"{len(lists)} EnumListType nodes named '{parent_label}'; "
                    f"{method} selected UID={object_uid(selected)}"
                )
            return object_uid(selected)

        uid = self.uid_generator.new_uid()
        self.target_store.insert(build_target_list(uid, parent_label), TARGET_LIST_PLACEMENT)
        log_success(self.logger, f"Created SPF EnumListType for parent: UID={uid}, Name='{parent_label}'")
        return uid

    @staticmethod
    def _apply_resolution(outcome: EntryOutcome, resolution: CandidateResolution) -> None:
        outcome.target_uid = resolution.uid
        outcome.candidate_count = resolution.candidate_count
        outcome.resolution = resolution.method
        outcome.fallback = resolution.fallback
        outcome.target_value = OpStatus.CREATED if resolution.created else OpStatus.EXISTS

    def _log_outcome(self, outcome: EntryOutcome) -> None:
        line = outcome.summary_line()
        if outcome.changed:
            log_success(self.logger, line)
        elif outcome.skip_reason == SkipReason.BLANK_RELATION_TARGET:
            self.logger.warning(line)
        else:
            self.logger.info(line)


def _lookup_hierarchy(
    hierarchies: Optional[dict[str, MultiLevelHierarchy]],
    grouping: Optional[str]
) -> Optional[MultiLevelHierarchy]:
    """Case-insensitive sheet lookup."""
    if not hierarchies or not grouping:
        return None
    if grouping in hierarchies:
        return hierarchies[grouping]
    wanted = grouping.casefold()
    for sheet, hierarchy in hierarchies.items():
        if sheet.casefold() == wanted:
            return hierarchy
    return None


__all__ = ['EnumValueService']
