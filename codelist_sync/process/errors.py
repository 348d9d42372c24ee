# Path: codelist_sync/process/errors.py
"""
Error Types for codelist_sync

Fatal errors stop the whole run:
- DocumentStructureError: a store has no loaded root element
- DocumentLoadError: an input XML document could not be parsed at all

Per-item errors are caught by the caller at item granularity
(one code list file, one code list) and the run continues:
- CodeListParseError
- HierarchyReadError
"""

from pathlib import Path
from typing import Optional


class CodelistSyncError(Exception):
    """Base class for all codelist_sync errors."""


class DocumentStructureError(CodelistSyncError):
    """A document store is not usable (no root element)."""

    def __init__(self, label: str, message: Optional[str] = None):
        self.label = label
        super().__init__(message or f"{label} document has no loaded root element")


class DocumentLoadError(CodelistSyncError):
    """An XML document could not be loaded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {path}: {reason}")


class CodeListParseError(CodelistSyncError):
    """A single code list source could not be parsed."""

    def __init__(self, message: str, source: Optional[Path] = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class HierarchyReadError(CodelistSyncError):
    """The hierarchy workbook could not be read."""


class ConfigurationError(CodelistSyncError):
    """A configuration value is present but unusable."""


__all__ = [
    'CodelistSyncError',
    'DocumentStructureError',
    'DocumentLoadError',
    'CodeListParseError',
    'HierarchyReadError',
    'ConfigurationError',
]
