# Path: codelist_sync/database/models/reconciliation_run.py
"""
Reconciliation Run Models

One ReconciliationRun row per tool invocation, with one
EntryOutcomeRecord row per reconciled code list entry.
"""

import uuid as uuid_module
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class ReconciliationRun(Base):
    """
    Audit record of a reconciliation run.

    Example:
        run = ReconciliationRun(
            map_source='/data/ToolMap.xml',
            target_source='/data/Target.xml',
            tie_break_policy='lowest_uid',
        )
    """
    __tablename__ = 'reconciliation_runs'

    # Primary key - string UUID for SQLite compatibility
    run_id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid_module.uuid4()),
        comment="Unique run identifier"
    )

    # Inputs
    map_source = Column(Text, comment="Map document read")
    target_source = Column(Text, comment="Target document read")
    tie_break_policy = Column(String(50), nullable=False, comment="Candidate tie-break policy")
    dry_run = Column(Boolean, default=False, comment="Documents were not saved")

    # Outputs
    map_output = Column(Text, comment="Map document written")
    target_output = Column(Text, comment="Target document written")

    # Statistics
    code_list_count = Column(Integer, default=0)
    entry_count = Column(Integer, default=0)
    changed_count = Column(Integer, default=0)
    failure_count = Column(Integer, default=0)

    status = Column(
        String(20),
        nullable=False,
        default='running',
        index=True,
        comment="running, completed or failed"
    )

    # Timestamps
    started_at = Column(DateTime, default=datetime.utcnow)
    finished_at = Column(DateTime)

    # Relationships
    outcomes = relationship(
        "EntryOutcomeRecord",
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="EntryOutcomeRecord.record_id",
    )

    def __repr__(self) -> str:
        return (
            f"<ReconciliationRun(run_id='{self.run_id}', status='{self.status}', "
            f"entries={self.entry_count})>"
        )


class EntryOutcomeRecord(Base):
    """Outcome of one code list entry within a run."""
    __tablename__ = 'entry_outcomes'

    record_id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(
        String(36),
        ForeignKey('reconciliation_runs.run_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    # Entry identification
    list_uid = Column(String(100), nullable=False, index=True)
    value_number = Column(Integer, nullable=False)
    short_label = Column(Text)
    grouping_name = Column(Text)
    parent_name = Column(Text)

    # Operation statuses
    map_value = Column(String(20))
    parent_relation = Column(String(20))
    target_value = Column(String(20))
    cross_relation = Column(String(20))
    containment = Column(String(20))

    # Resolution
    target_uid = Column(String(100))
    candidate_count = Column(Integer, default=0)
    resolution = Column(String(100))
    fallback = Column(Boolean, default=False)
    skip_reason = Column(String(50))

    run = relationship("ReconciliationRun", back_populates="outcomes")

    @property
    def value_uid(self) -> str:
        return f"{self.list_uid}_{self.value_number}"

    def __repr__(self) -> str:
        return (
            f"<EntryOutcomeRecord(value_uid='{self.value_uid}', "
            f"target_uid='{self.target_uid}')>"
        )


__all__ = ['ReconciliationRun', 'EntryOutcomeRecord']
