# Path: codelist_sync/output/formatters/json_formatter.py
"""
JSON Formatter

Renders ReportData as structured JSON, keeping every list check,
scan result and entry outcome for post-hoc auditing.
"""

import json
from typing import Any

from ..report_models import ReportData
from .base_formatter import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Renders report as JSON."""

    @property
    def format_name(self) -> str:
        return 'json'

    @property
    def file_extension(self) -> str:
        return '.json'

    def format_report(self, report: ReportData) -> str:
        """Serialize report to JSON string."""
        return json.dumps(self._serialize_report(report), indent=2, default=str)

    def _serialize_report(self, report: ReportData) -> dict[str, Any]:
        return {
            'run_id': report.run_id,
            'generated_at': report.generated_at,
            'dry_run': report.dry_run,
            'sources': report.sources,
            'outputs': report.outputs,
            'code_list_issues': report.code_list_issues,
            **report.result.to_dict(),
        }


__all__ = ['JsonFormatter']
