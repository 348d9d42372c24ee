# Path: codelist_sync/output/formatters/text_formatter.py
"""
Text Formatter

Renders ReportData as ASCII text for console display and plain-text
files. Unchanged entries are counted, not listed.
"""

from ...constants import (
    MENU_HEADER,
    MENU_SEPARATOR,
    STATUS_FAIL,
    STATUS_INFO,
    STATUS_OK,
    STATUS_WARN,
    ListDefStatus,
)
from ..report_models import ReportData
from .base_formatter import BaseFormatter


class TextFormatter(BaseFormatter):
    """Renders report as ASCII text."""

    @property
    def format_name(self) -> str:
        return 'text'

    @property
    def file_extension(self) -> str:
        return '.txt'

    def format_report(self, report: ReportData) -> str:
        """Render full report as text."""
        result = report.result
        summary = report.summary

        lines = ['', MENU_HEADER, f"  CODE LIST RECONCILIATION  {report.run_id}"]
        if report.dry_run:
            lines.append("  DRY RUN: documents were not saved")
        lines.append(MENU_HEADER)

        lines.append('')
        lines.append("  DOCUMENTS:")
        lines.append(MENU_SEPARATOR)
        for label, source in report.sources.items():
            output = report.output_for(label) or '(not saved)'
            lines.append(f"    {label:10s} {source}")
            lines.append(f"    {'':10s} -> {output}")

        lines.append('')
        lines.append("  SUMMARY:")
        lines.append(MENU_SEPARATOR)
        for key in (
            'code_lists', 'lists_created', 'list_name_mismatches', 'lists_scanned',
            'list_relations_missing', 'target_lists_created', 'entries',
            'entries_changed', 'failures',
        ):
            lines.append(f"    {key.replace('_', ' '):28s} {summary[key]}")

        lines.append('')
        lines.append("  ENTRY OPERATIONS:")
        lines.append(MENU_SEPARATOR)
        for operation, counts in summary['statuses'].items():
            rendered = ', '.join(f"{status}={count}" for status, count in sorted(counts.items()))
            lines.append(f"    {operation:28s} {rendered}")

        mismatches = [c for c in result.list_checks if c.status == ListDefStatus.NAME_MISMATCH]
        if mismatches:
            lines.append('')
            lines.append(f"  NAME MISMATCHES ({len(mismatches)}):")
            lines.append(MENU_SEPARATOR)
            for check in mismatches:
                lines.append(
                    f"    {STATUS_WARN} {check.uid}: existing='{check.existing_name}' "
                    f"parsed='{check.parsed_name}'"
                )

        missing = [s for s in result.scan_results if not s.relation_exists]
        if missing:
            lines.append('')
            lines.append(f"  LISTS WITHOUT TARGET RELATION ({len(missing)}):")
            lines.append(MENU_SEPARATOR)
            for scan in missing:
                lines.append(f"    {STATUS_WARN} {scan.uid1} '{scan.name or ''}'")

        changed = [o for o in result.outcomes if o.changed]
        if changed:
            lines.append('')
            lines.append(f"  CHANGED ENTRIES ({len(changed)}):")
            lines.append(MENU_SEPARATOR)
            for outcome in changed:
                lines.append(f"    {STATUS_OK} {outcome.summary_line()}")

        fallbacks = [o for o in result.outcomes if o.fallback]
        if fallbacks:
            lines.append('')
            lines.append(f"  TIE-BREAK FALLBACKS ({len(fallbacks)}):")
            lines.append(MENU_SEPARATOR)
            for outcome in fallbacks:
                lines.append(
                    f"    {STATUS_INFO} {outcome.value_uid} '{outcome.short_label}': "
                    f"{outcome.candidate_count} candidates, {outcome.resolution} -> {outcome.target_uid}"
                )

        issues = list(report.code_list_issues.items())
        issues += [(f.item, f.reason) for f in result.failures]
        if issues:
            lines.append('')
            lines.append(f"  FAILURES AND SKIPS ({len(issues)}):")
            lines.append(MENU_SEPARATOR)
            for item, reason in issues:
                lines.append(f"    {STATUS_FAIL} {item}: {reason}")

        lines.append('')
        lines.append(MENU_HEADER)
        lines.append(f"  Generated: {report.generated_at}")
        lines.append('')
        return '\n'.join(lines)


__all__ = ['TextFormatter']
