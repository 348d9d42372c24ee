# Path: codelist_sync/output/__init__.py
"""
Output Module for codelist_sync

Writes reconciled documents as new versions next to their sources and
produces human-readable and machine-readable run reports.

Architecture:
    document_writer   - Serialize stores, never overwriting inputs
    versioned_path    - Next free "<stem>_NNN<ext>" path
    ReportGenerator   - Main entry point for report generation
    FormatterRegistry - Register new report formats

Usage:
    from codelist_sync.output import ReportGenerator, save_as_next_version

    path = save_as_next_version(map_store)
    report = ReportGenerator(config).generate(result)
"""

from .versioned_path import next_version_path
from .document_writer import save_document, save_as_next_version, to_string
from .report_models import ReportData
from .report_generator import ReportGenerator
from .formatters import (
    BaseFormatter,
    FormatterRegistry,
    JsonFormatter,
    TextFormatter,
    CsvFormatter,
)


__all__ = [
    # Documents
    'next_version_path',
    'save_document',
    'save_as_next_version',
    'to_string',
    # Reports
    'ReportData',
    'ReportGenerator',
    # Formatters
    'BaseFormatter',
    'FormatterRegistry',
    'JsonFormatter',
    'TextFormatter',
    'CsvFormatter',
]
