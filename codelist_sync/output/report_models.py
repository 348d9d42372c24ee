# Path: codelist_sync/output/report_models.py
"""
Report Data Models

Format-agnostic data for reconciliation reports. The generator
produces them; formatters consume them.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..process.models.outcomes import ReconciliationResult


@dataclass
class ReportData:
    """
    Complete report ready for formatting.

    Attributes:
        run_id: Identifier of the run (timestamp based)
        generated_at: ISO timestamp of report generation
        result: Reconciliation result being reported
        sources: Store label -> input document path
        outputs: Store label -> written document path
        dry_run: Whether documents were left unsaved
        code_list_issues: Code list file -> skip or failure reason
    """
    run_id: str
    generated_at: str
    result: ReconciliationResult
    sources: dict[str, str] = field(default_factory=dict)
    outputs: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False
    code_list_issues: dict[str, str] = field(default_factory=dict)

    @property
    def summary(self) -> dict:
        return self.result.summary()

    def output_for(self, label: str) -> Optional[str]:
        return self.outputs.get(label)


__all__ = ['ReportData']
