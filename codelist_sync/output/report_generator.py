# Path: codelist_sync/output/report_generator.py
"""
Report Generator

Turns a ReconciliationResult into ReportData, then writes output files
via registered formatters.

Architecture:
    ReconciliationResult  ->  ReportData  ->  [Formatters]  ->  Files

Usage:
    from codelist_sync.output import ReportGenerator

    generator = ReportGenerator(config)
    report = generator.generate(result, sources={'map': 'ToolMap.xml'})
    paths = generator.write(report)
    print(generator.to_console(report))
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config_loader import ConfigLoader
from ..core.logger.ipo_logging import get_output_logger, log_success
from ..process.models.outcomes import ReconciliationResult

from .report_models import ReportData
from .formatters import (
    FormatterRegistry,
    JsonFormatter,
    TextFormatter,
    CsvFormatter,
)


def _register_defaults() -> None:
    """json, text and csv are always available."""
    FormatterRegistry.register(JsonFormatter)
    FormatterRegistry.register(TextFormatter)
    FormatterRegistry.register(CsvFormatter)


# Registered on import; FormatterRegistry starts empty
_register_defaults()


class ReportGenerator:
    """
    Generates reconciliation reports in one or more formats.

    Example:
        generator = ReportGenerator(config)
        report = generator.generate(result, dry_run=True)
        paths = generator.write(report, formats=['json'])
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Args:
            config: Settings for reports_dir and report_formats
                (the shared ConfigLoader when omitted)
        """
        self._config = config
        self.logger = get_output_logger('report_generator')

    @property
    def config(self) -> ConfigLoader:
        if self._config is None:
            self._config = ConfigLoader()
        return self._config

    def generate(
        self,
        result: ReconciliationResult,
        sources: Optional[dict[str, str]] = None,
        outputs: Optional[dict[str, str]] = None,
        dry_run: bool = False,
        code_list_issues: Optional[dict[str, str]] = None,
    ) -> ReportData:
        """
        Build ReportData from a ReconciliationResult.

        Args:
            result: Result of a reconciliation run
            sources: Store label -> input document path
            outputs: Store label -> written document path
            dry_run: Whether the documents were left unsaved
            code_list_issues: Code list file -> skip or failure reason

        Returns:
            ReportData ready for formatting
        """
        now = datetime.now()
        report = ReportData(
            run_id=now.strftime('%Y%m%d_%H%M%S'),
            generated_at=now.isoformat(timespec='seconds'),
            result=result,
            sources=dict(sources or {}),
            outputs=dict(outputs or {}),
            dry_run=dry_run,
            code_list_issues=dict(code_list_issues or {}),
        )

        self.logger.info(
            f"Generated report {report.run_id}: {len(result.outcomes)} entries, "
            f"{len(result.failures)} failures"
        )
        return report

    def write(
        self,
        report: ReportData,
        output_dir: Optional[Path] = None,
        formats: Optional[list[str]] = None,
    ) -> dict[str, Path]:
        """
        Write one file per format into the reports directory.

        Unknown format names are logged and skipped.

        Args:
            report: Report of one run
            output_dir: Directory to use instead of CODELIST_SYNC_REPORTS_DIR
            formats: Format names to use instead of CODELIST_SYNC_REPORT_FORMATS

        Returns:
            Format name -> written file

        Raises:
            ValueError: If no reports directory is given or configured
        """
        if output_dir is None:
            output_dir = self.config.get('reports_dir')
            if not output_dir:
                raise ValueError("No reports directory: set CODELIST_SYNC_REPORTS_DIR")

        if formats is None:
            formats = self.config.get('report_formats', ['json', 'text'])

        written: dict[str, Path] = {}
        for name in formats:
            formatter = FormatterRegistry.get(name)
            if formatter is None:
                self.logger.warning(
                    f"Unknown report format '{name}' "
                    f"(available: {', '.join(FormatterRegistry.get_available())})"
                )
                continue

            written[name] = formatter.write_report(report, Path(output_dir))
            log_success(self.logger, f"Report {report.run_id} written as {name}: {written[name]}")

        return written

    def to_console(self, report: ReportData) -> str:
        """Render report as console-friendly text."""
        formatter = FormatterRegistry.get('text')
        if formatter is None:
            return f"[No text formatter available for {report.run_id}]"
        return formatter.format_report(report)

    def to_json(self, report: ReportData) -> str:
        """Render report as JSON string."""
        formatter = FormatterRegistry.get('json')
        if formatter is None:
            return '{}'
        return formatter.format_report(report)


__all__ = ['ReportGenerator']
