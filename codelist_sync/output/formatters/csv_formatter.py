# Path: codelist_sync/output/formatters/csv_formatter.py
"""
CSV Formatter

Renders the entry outcomes of a report as CSV for spreadsheet review,
one row per code list entry.
"""

import csv
import io

from ..report_models import ReportData
from .base_formatter import BaseFormatter


COLUMNS = [
    'list_uid', 'value_uid', 'value_number', 'short_label', 'grouping_name',
    'parent_name', 'map_value', 'parent_relation', 'target_value',
    'cross_relation', 'containment', 'target_uid', 'candidate_count',
    'resolution', 'fallback', 'skip_reason',
]


class CsvFormatter(BaseFormatter):
    """Renders entry outcomes as CSV."""

    @property
    def format_name(self) -> str:
        return 'csv'

    @property
    def file_extension(self) -> str:
        return '.csv'

    def format_report(self, report: ReportData) -> str:
        """Render report as CSV string."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=COLUMNS, extrasaction='ignore')
        writer.writeheader()
        for outcome in report.result.outcomes:
            writer.writerow(outcome.to_dict())
        return output.getvalue()


__all__ = ['CsvFormatter']
