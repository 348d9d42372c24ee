# Path: codelist_sync/process/models/outcomes.py
"""
Outcome Models

Structured records emitted by every reconciliation decision. Together
they allow a full audit of a run without walking the documents again.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ...constants import ListDefStatus, OpStatus, SkipReason


@dataclass
class EnumListCheckResult:
    """
    Result of ensuring a Map list definition for one code list.

    Attributes:
        uid: Map list UID (e.g., "PDS3DEnumList_35")
        status: CREATED, EXISTS or NAME_MISMATCH
        parsed_name: Name from the code list source
        existing_name: Name already in the Map store (None when created)
    """
    uid: str
    status: ListDefStatus
    parsed_name: Optional[str] = None
    existing_name: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'uid': self.uid,
            'status': self.status.value,
            'parsed_name': self.parsed_name,
            'existing_name': self.existing_name,
        }


@dataclass
class EnumListScanResult:
    """
    Result of scanning one Map list definition and its cross relation.

    Attributes:
        uid1: Map list UID
        enum_number: Number parsed from uid1 (None when not parseable)
        name: Map list name
        relation_exists: Whether a list-to-list relation exists
        relation_uid2: Target list UID taken from the relation
        target_list_exists: Whether the Target list exists after the scan
        target_list_name: Name of the Target list
        target_list_created: Whether the scan created the Target list
    """
    uid1: str
    enum_number: Optional[int] = None
    name: Optional[str] = None
    relation_exists: bool = False
    relation_uid2: Optional[str] = None
    target_list_exists: bool = False
    target_list_name: Optional[str] = None
    target_list_created: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'uid1': self.uid1,
            'enum_number': self.enum_number,
            'name': self.name,
            'relation_exists': self.relation_exists,
            'relation_uid2': self.relation_uid2,
            'target_list_exists': self.target_list_exists,
            'target_list_name': self.target_list_name,
            'target_list_created': self.target_list_created,
        }


@dataclass
class EntryOutcome:
    """
    Outcome of reconciling one code list entry.

    Attributes:
        list_uid: Map list UID
        value_number: Entry number
        short_label: Entry short label
        grouping_name: Sheet the code list belongs to (None when unmapped)
        parent_name: Immediate hierarchy parent of the label, if any
        map_value: Status of the Map value node
        parent_relation: Status of the Map list -> value relation
        target_value: Status of the Target value node
        cross_relation: Status of the Map value -> Target value relation
        containment: Status of the Target list -> value Contains relation
        target_uid: Target value UID the entry is linked to
        candidate_count: Target values matching the label by name
        resolution: How the Target value was chosen
        fallback: Whether a tie-break chose the Target value
        skip_reason: Why containment (or linking) was skipped
    """
    list_uid: str
    value_number: int
    short_label: str
    grouping_name: Optional[str] = None
    parent_name: Optional[str] = None
    map_value: OpStatus = OpStatus.SKIPPED
    parent_relation: OpStatus = OpStatus.SKIPPED
    target_value: OpStatus = OpStatus.SKIPPED
    cross_relation: OpStatus = OpStatus.SKIPPED
    containment: OpStatus = OpStatus.SKIPPED
    target_uid: Optional[str] = None
    candidate_count: int = 0
    resolution: Optional[str] = None
    fallback: bool = False
    skip_reason: Optional[SkipReason] = None

    @property
    def value_uid(self) -> str:
        return f"{self.list_uid}_{self.value_number}"

    @property
    def changed(self) -> bool:
        """True when any operation modified a document."""
        return any(
            status in (OpStatus.CREATED, OpStatus.UPDATED)
            for status in self.statuses().values()
        )

    def statuses(self) -> dict[str, OpStatus]:
        """Status per ensure-operation."""
        return {
            'map_value': self.map_value,
            'parent_relation': self.parent_relation,
            'target_value': self.target_value,
            'cross_relation': self.cross_relation,
            'containment': self.containment,
        }

    def summary_line(self) -> str:
        """Compact one-line description for logs."""
        line = (
            f"EnumList={self.list_uid} Entry={self.value_number} "
            f"Name='{self.short_label}' "
            f"EnumDef={self.map_value.value} ParentRel={self.parent_relation.value} "
            f"TargetValue={self.target_value.value} CrossRel={self.cross_relation.value} "
            f"Contains={self.containment.value}"
        )
        if self.target_uid:
            line += f" uid2={self.target_uid}"
        if self.grouping_name:
            line += f" grouping='{self.grouping_name}'"
        if self.skip_reason:
            line += f" skip={self.skip_reason.value}"
        return line

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'list_uid': self.list_uid,
            'value_uid': self.value_uid,
            'value_number': self.value_number,
            'short_label': self.short_label,
            'grouping_name': self.grouping_name,
            'parent_name': self.parent_name,
            **{key: status.value for key, status in self.statuses().items()},
            'target_uid': self.target_uid,
            'candidate_count': self.candidate_count,
            'resolution': self.resolution,
            'fallback': self.fallback,
            'skip_reason': self.skip_reason.value if self.skip_reason else None,
        }


@dataclass
class ItemFailure:
    """A source item that was skipped because it could not be processed."""
    item: str
    reason: str

    def to_dict(self) -> dict:
        return {'item': self.item, 'reason': self.reason}


@dataclass
class ReconciliationResult:
    """
    Everything one reconciliation pass decided.

    Attributes:
        list_checks: One result per code list (Map list definition)
        scan_results: One result per Map list definition found
        outcomes: One outcome per code list entry
        failures: Code lists whose reconciliation raised
        started_at: Start timestamp
        finished_at: End timestamp
    """
    list_checks: list[EnumListCheckResult] = field(default_factory=list)
    scan_results: list[EnumListScanResult] = field(default_factory=list)
    outcomes: list[EntryOutcome] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def changed(self) -> bool:
        """True when the pass modified either document."""
        return (
            any(check.status == ListDefStatus.CREATED for check in self.list_checks)
            or any(scan.target_list_created for scan in self.scan_results)
            or any(outcome.changed for outcome in self.outcomes)
        )

    def status_counts(self) -> dict[str, dict[str, int]]:
        """Count statuses per operation across all entry outcomes."""
        counts: dict[str, Counter] = {}
        for outcome in self.outcomes:
            for operation, status in outcome.statuses().items():
                counts.setdefault(operation, Counter())[status.value] += 1
        return {operation: dict(counter) for operation, counter in counts.items()}

    def summary(self) -> dict:
        """Summary counters for reports."""
        return {
            'code_lists': len(self.list_checks),
            'lists_created': sum(
                1 for check in self.list_checks if check.status == ListDefStatus.CREATED
            ),
            'list_name_mismatches': sum(
                1 for check in self.list_checks if check.status == ListDefStatus.NAME_MISMATCH
            ),
            'lists_scanned': len(self.scan_results),
            'list_relations_missing': sum(
                1 for scan in self.scan_results if not scan.relation_exists
            ),
            'target_lists_created': sum(
                1 for scan in self.scan_results if scan.target_list_created
            ),
            'entries': len(self.outcomes),
            'entries_changed': sum(1 for outcome in self.outcomes if outcome.changed),
            'failures': len(self.failures),
            'statuses': self.status_counts(),
        }

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'started_at': self.started_at.isoformat(),
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'summary': self.summary(),
            'list_checks': [check.to_dict() for check in self.list_checks],
            'scan_results': [scan.to_dict() for scan in self.scan_results],
            'outcomes': [outcome.to_dict() for outcome in self.outcomes],
            'failures': [failure.to_dict() for failure in self.failures],
        }


__all__ = [
    'EnumListCheckResult',
    'EnumListScanResult',
    'EntryOutcome',
    'ItemFailure',
    'ReconciliationResult',
]
