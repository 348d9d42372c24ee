# Path: codelist_sync/database/models/__init__.py
"""
Database Models for codelist_sync.

Provides SQLAlchemy models for storing:
- Reconciliation runs (inputs, outputs, statistics)
- Entry outcomes (per code list entry statuses)
"""

from .base import (
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
from .reconciliation_run import ReconciliationRun, EntryOutcomeRecord


__all__ = [
    'Base',
    'initialize_engine',
    'get_engine',
    'get_session',
    'session_scope',
    'create_all_tables',
    'drop_all_tables',
    'reset_engine',
    'get_database_type',
    'ReconciliationRun',
    'EntryOutcomeRecord',
]
