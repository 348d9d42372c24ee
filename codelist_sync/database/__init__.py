# Path: codelist_sync/database/__init__.py
"""
codelist_sync Database Module

Optional audit trail of reconciliation runs. Each run stores its
inputs, outputs, summary counters and one record per code list entry.

Example:
    from codelist_sync.database import initialize_database, session_scope, RunOperations

    initialize_database('sqlite:///audit.db')

    with session_scope() as session:
        run = RunOperations.create_run(session, 'ToolMap.xml', 'Target.xml', 'lowest_uid')
        RunOperations.record_outcomes(session, run, result.outcomes)
        RunOperations.finish_run(session, run, result)
"""

from typing import Optional

from .models.base import (
    Base,
    initialize_engine,
    get_engine,
    get_session,
    session_scope,
    create_all_tables,
    drop_all_tables,
    reset_engine,
    get_database_type,
)
from .models.reconciliation_run import ReconciliationRun, EntryOutcomeRecord
from .operations.run_ops import RunOperations


def initialize_database(db_url: Optional[str] = None) -> None:
    """
    Initialize the audit database and create its tables.

    Args:
        db_url: SQLAlchemy URL; None uses an in-memory SQLite database
    """
    initialize_engine(db_url)
    create_all_tables()


__all__ = [
    # Initialization
    'initialize_database',
    'initialize_engine',
    'get_engine',
    'get_session',
    'session_scope',
    'create_all_tables',
    'drop_all_tables',
    'reset_engine',
    'get_database_type',
    # Models
    'Base',
    'ReconciliationRun',
    'EntryOutcomeRecord',
    # Operations
    'RunOperations',
]
