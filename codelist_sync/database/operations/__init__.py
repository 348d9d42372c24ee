# Path: codelist_sync/database/operations/__init__.py
"""
Database Operations for codelist_sync.

CRUD operations for reconciliation audit records.
"""

from .run_ops import (
    RunOperations,
    RUN_STATUS_RUNNING,
    RUN_STATUS_COMPLETED,
    RUN_STATUS_FAILED,
)


__all__ = [
    'RunOperations',
    'RUN_STATUS_RUNNING',
    'RUN_STATUS_COMPLETED',
    'RUN_STATUS_FAILED',
]
