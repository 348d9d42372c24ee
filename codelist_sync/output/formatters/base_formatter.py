# Path: codelist_sync/output/formatters/base_formatter.py
"""
Report Formatters: base class and registry

A formatter turns one ReportData into the text of one report file,
named reconciliation_<run_id><extension> in the reports directory.
Formats are looked up by the names listed in
CODELIST_SYNC_REPORT_FORMATS; a new format only needs a subclass and
a FormatterRegistry.register() call.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Type

from ..report_models import ReportData


REPORT_FILE_PREFIX = 'reconciliation_'


class BaseFormatter(ABC):
    """One report file format."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name used in CODELIST_SYNC_REPORT_FORMATS (e.g., 'csv')."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Suffix of the written file, with the dot."""

    @abstractmethod
    def format_report(self, report: ReportData) -> str:
        """Full file content for the report."""

    def report_filename(self, report: ReportData) -> str:
        return f"{REPORT_FILE_PREFIX}{report.run_id}{self.file_extension}"

    def write_report(self, report: ReportData, output_path: Path) -> Path:
        """
        Write the report into a directory, creating it when missing.

        Returns:
            Path of the written file
        """
        output_path.mkdir(parents=True, exist_ok=True)
        filepath = output_path / self.report_filename(report)
        filepath.write_text(self.format_report(report), encoding='utf-8')
        return filepath


class FormatterRegistry:
    """Format name -> formatter class, filled at import of report_generator."""

    _formatters: dict[str, Type[BaseFormatter]] = {}

    @classmethod
    def register(cls, formatter_class: Type[BaseFormatter]) -> None:
        cls._formatters[formatter_class().format_name] = formatter_class

    @classmethod
    def get(cls, format_name: str) -> Optional[BaseFormatter]:
        """New formatter for a name, or None when the format is unknown."""
        formatter_class = cls._formatters.get(format_name)
        if formatter_class is None:
            return None
        return formatter_class()

    @classmethod
    def get_available(cls) -> list[str]:
        return sorted(cls._formatters)


__all__ = ['BaseFormatter', 'FormatterRegistry', 'REPORT_FILE_PREFIX']
