# Path: codelist_sync/process/__init__.py
"""
codelist_sync Process Package

Reconciliation engine for the ToolMap (Map) and SPF (Target) schema
documents.

Main entry point:
    from codelist_sync.process import ReconciliationCoordinator

    coordinator = ReconciliationCoordinator(map_store, target_store)
    result = coordinator.run(code_lists, enum_to_sheet, hierarchies)
"""

from .coordinator import ReconciliationCoordinator
from .errors import (
    CodelistSyncError,
    DocumentStructureError,
    DocumentLoadError,
    CodeListParseError,
    HierarchyReadError,
    ConfigurationError,
)
from .store import DocumentStore, UidGenerator, SequentialUidGenerator

__all__ = [
    'ReconciliationCoordinator',
    'CodelistSyncError',
    'DocumentStructureError',
    'DocumentLoadError',
    'CodeListParseError',
    'HierarchyReadError',
    'ConfigurationError',
    'DocumentStore',
    'UidGenerator',
    'SequentialUidGenerator',
]
