# Path: codelist_sync/process/models/__init__.py
"""
Process Models

Plain data records read and produced by the reconciliation engine.
"""

from .codelist import CodeEntry, CodeList
from .hierarchy import EdgeMap, MultiLevelHierarchy
from .outcomes import (
    EnumListCheckResult,
    EnumListScanResult,
    EntryOutcome,
    ItemFailure,
    ReconciliationResult,
)

__all__ = [
    'CodeEntry',
    'CodeList',
    'EdgeMap',
    'MultiLevelHierarchy',
    'EnumListCheckResult',
    'EnumListScanResult',
    'EntryOutcome',
    'ItemFailure',
    'ReconciliationResult',
]
