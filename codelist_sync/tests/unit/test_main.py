# Path: codelist_sync/tests/unit/test_main.py
"""
Unit Tests for main.py

Tests the CLI entry point functionality including:
- Argument parsing
- Tie-break policy resolution
- A full run against temporary documents
- Exit codes
"""

import json
import logging
import os
from unittest.mock import patch

import pytest

from codelist_sync.constants import TieBreakPolicy
from codelist_sync.main import build_parser, main, print_banner, resolve_policy
from codelist_sync.process.errors import ConfigurationError


EMPTY_MAP_XML = '<?xml version="1.0" encoding="utf-8"?>\n<ToolMapSchema>\n</ToolMapSchema>\n'
EMPTY_TARGET_XML = '<?xml version="1.0" encoding="utf-8"?>\n<SPFSchema>\n</SPFSchema>\n'


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def workspace(temp_dir, sample_edt_text, reset_singletons):
    """Documents, code lists and environment for a full run."""
    (temp_dir / 'ToolMap.xml').write_text(EMPTY_MAP_XML, encoding='utf-8')
    (temp_dir / 'SPF.xml').write_text(EMPTY_TARGET_XML, encoding='utf-8')
    codelists = temp_dir / 'codelists'
    codelists.mkdir()
    (codelists / 'code0035.edt').write_text(sample_edt_text, encoding='utf-8')
    (codelists / 'readme.edt').write_text(sample_edt_text, encoding='utf-8')

    env = {
        'CODELIST_SYNC_MAP_SCHEMA_PATH': str(temp_dir / 'ToolMap.xml'),
        'CODELIST_SYNC_TARGET_SCHEMA_PATH': str(temp_dir / 'SPF.xml'),
        'CODELIST_SYNC_CODELIST_DIR': str(codelists),
        'CODELIST_SYNC_LOG_DIR': str(temp_dir / 'logs'),
        'CODELIST_SYNC_REPORTS_DIR': str(temp_dir / 'reports'),
        'CODELIST_SYNC_REPORT_FORMATS': 'json',
        'CODELIST_SYNC_ENUM_SHEET_MAP_PATH': '',
        'CODELIST_SYNC_HIERARCHY_WORKBOOK_PATH': '',
        'CODELIST_SYNC_OUTPUT_DIR': '',
        'CODELIST_SYNC_AUDIT_DATABASE_URL': '',
        'CODELIST_SYNC_TIE_BREAK_POLICY': 'lowest_uid',
    }
    with patch.dict(os.environ, env):
        yield temp_dir


class TestPrintBanner:
    """Test banner printing."""

    def test_banner_is_ascii_only(self, capsys):
        print_banner()
        captured = capsys.readouterr()

        assert 'CODELIST_SYNC' in captured.out
        for char in captured.out:
            assert ord(char) < 128, f"Non-ASCII character found: {char}"


class TestArgumentParsing:
    """Test command line argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert not args.dry_run
        assert not args.no_hierarchy
        assert args.tie_break is None

    def test_flags(self):
        args = build_parser().parse_args(['--dry-run', '--no-hierarchy', '-t', 'first_found', '-q'])

        assert args.dry_run and args.no_hierarchy and args.quiet
        assert args.tie_break == 'first_found'

    def test_invalid_tie_break_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--tie-break', 'random'])


class TestResolvePolicy:
    """Configured policy names."""

    def test_known_policy(self):
        assert resolve_policy(' First_Found ') == TieBreakPolicy.FIRST_FOUND

    def test_unknown_policy(self):
        with pytest.raises(ConfigurationError):
            resolve_policy('newest')


class TestMain:
    """Full runs through main()."""

    def test_run_writes_new_versions(self, workspace):
        exit_code = main(['--quiet'])

        assert exit_code == 0
        assert (workspace / 'ToolMap_001.xml').exists()
        assert (workspace / 'SPF_001.xml').exists()
        assert (workspace / 'ToolMap.xml').read_text(encoding='utf-8') == EMPTY_MAP_XML

        reports = list((workspace / 'reports').glob('reconciliation_*.json'))
        assert len(reports) == 1
        data = json.loads(reports[0].read_text(encoding='utf-8'))
        assert data['summary']['entries'] == 3
        assert data['summary']['lists_created'] == 1
        assert len(data['code_list_issues']) == 1

    def test_dry_run_writes_no_documents(self, workspace):
        exit_code = main(['--quiet', '--dry-run'])

        assert exit_code == 0
        assert not (workspace / 'ToolMap_001.xml').exists()
        assert not (workspace / 'SPF_001.xml').exists()

    def test_console_report(self, workspace, capsys):
        with patch.dict(os.environ, {'CODELIST_SYNC_LOG_CONSOLE': 'false'}):
            exit_code = main(['--dry-run'])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert 'CODE LIST RECONCILIATION' in out
        assert 'Dry run' in out

    def test_missing_document_is_fatal(self, workspace):
        (workspace / 'SPF.xml').unlink()

        assert main(['--quiet']) == 1

    def test_invalid_configured_policy(self, workspace):
        with patch.dict(os.environ, {'CODELIST_SYNC_TIE_BREAK_POLICY': 'newest'}):
            assert main(['--quiet']) == 1

    def test_audit_database(self, workspace):
        db_path = workspace / 'audit.db'
        with patch.dict(os.environ, {'CODELIST_SYNC_AUDIT_DATABASE_URL': f'sqlite:///{db_path}'}):
            from codelist_sync.database import reset_engine
            reset_engine()
            try:
                assert main(['--quiet']) == 0
            finally:
                reset_engine()

        assert db_path.exists()

    def test_keyboard_interrupt(self, workspace):
        with patch('codelist_sync.main.run_reconciliation', side_effect=KeyboardInterrupt):
            assert main(['--quiet']) == 130
