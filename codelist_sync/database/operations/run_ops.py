# Path: codelist_sync/database/operations/run_ops.py
"""
Run Operations

CRUD operations for ReconciliationRun and EntryOutcomeRecord records.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from ...process.models.outcomes import EntryOutcome, ReconciliationResult
from ..models.reconciliation_run import EntryOutcomeRecord, ReconciliationRun


logger = logging.getLogger(__name__)

RUN_STATUS_RUNNING = 'running'
RUN_STATUS_COMPLETED = 'completed'
RUN_STATUS_FAILED = 'failed'


class RunOperations:
    """
    Operations for reconciliation audit records.

    Provides static methods; all methods require a session to be
    passed in.

    Example:
        with session_scope() as session:
            run = RunOperations.create_run(session, map_source, target_source, 'lowest_uid')
            RunOperations.record_outcomes(session, run, result.outcomes)
            RunOperations.finish_run(session, run, result)
    """

    @staticmethod
    def create_run(
        session: Session,
        map_source: Optional[str],
        target_source: Optional[str],
        tie_break_policy: str,
        dry_run: bool = False,
    ) -> ReconciliationRun:
        """
        Create a new run record in the running state.

        Args:
            session: Database session
            map_source: Map document path
            target_source: Target document path
            tie_break_policy: Policy value used by the run
            dry_run: Whether documents will be left unsaved

        Returns:
            Created ReconciliationRun instance
        """
        run = ReconciliationRun(
            map_source=map_source,
            target_source=target_source,
            tie_break_policy=tie_break_policy,
            dry_run=dry_run,
            status=RUN_STATUS_RUNNING,
        )
        session.add(run)
        session.flush()  # Get the ID

        logger.info(f"Created reconciliation run: {run.run_id}")
        return run

    @staticmethod
    def record_outcomes(
        session: Session,
        run: ReconciliationRun,
        outcomes: Iterable[EntryOutcome],
    ) -> int:
        """
        Store one record per entry outcome.

        Returns:
            Number of records added
        """
        count = 0
        for outcome in outcomes:
            run.outcomes.append(EntryOutcomeRecord(
                list_uid=outcome.list_uid,
                value_number=outcome.value_number,
                short_label=outcome.short_label,
                grouping_name=outcome.grouping_name,
                parent_name=outcome.parent_name,
                map_value=outcome.map_value.value,
                parent_relation=outcome.parent_relation.value,
                target_value=outcome.target_value.value,
                cross_relation=outcome.cross_relation.value,
                containment=outcome.containment.value,
                target_uid=outcome.target_uid,
                candidate_count=outcome.candidate_count,
                resolution=outcome.resolution,
                fallback=outcome.fallback,
                skip_reason=outcome.skip_reason.value if outcome.skip_reason else None,
            ))
            count += 1
        session.flush()

        logger.info(f"Recorded {count} entry outcomes for run {run.run_id}")
        return count

    @staticmethod
    def finish_run(
        session: Session,
        run: ReconciliationRun,
        result: Optional[ReconciliationResult],
        map_output: Optional[str] = None,
        target_output: Optional[str] = None,
        failed: bool = False,
    ) -> ReconciliationRun:
        """
        Close a run, copying statistics from the result.

        Args:
            session: Database session
            run: Run to close
            result: Result of the run (None when the run failed early)
            map_output: Map document written
            target_output: Target document written
            failed: Mark the run as failed

        Returns:
            Updated ReconciliationRun
        """
        if result is not None:
            summary = result.summary()
            run.code_list_count = summary['code_lists']
            run.entry_count = summary['entries']
            run.changed_count = summary['entries_changed']
            run.failure_count = summary['failures']

        run.map_output = map_output
        run.target_output = target_output
        run.status = RUN_STATUS_FAILED if failed else RUN_STATUS_COMPLETED
        run.finished_at = datetime.utcnow()
        session.flush()

        logger.info(f"Finished reconciliation run {run.run_id}: {run.status}")
        return run

    @staticmethod
    def find_by_id(session: Session, run_id: str) -> Optional[ReconciliationRun]:
        """Find run by ID."""
        return session.query(ReconciliationRun).filter_by(run_id=run_id).first()

    @staticmethod
    def find_outcomes(
        session: Session,
        run_id: str,
        list_uid: Optional[str] = None,
    ) -> List[EntryOutcomeRecord]:
        """
        Find entry outcome records of a run.

        Args:
            session: Database session
            run_id: Run UUID
            list_uid: Restrict to one Map list

        Returns:
            Records in insertion order
        """
        query = session.query(EntryOutcomeRecord).filter_by(run_id=run_id)
        if list_uid is not None:
            query = query.filter_by(list_uid=list_uid)
        return query.order_by(EntryOutcomeRecord.record_id).all()


__all__ = [
    'RunOperations',
    'RUN_STATUS_RUNNING',
    'RUN_STATUS_COMPLETED',
    'RUN_STATUS_FAILED',
]
