# Path: codelist_sync/tests/unit/test_codelist_reader.py
"""
Unit Tests for the Code List Reader

Tests .edt parsing:
- Enum number from file name
- List name from the second comment line
- Entry lines, placeholders and duplicates
- Folder reading with per-file isolation
"""

from pathlib import Path

import pytest

from codelist_sync.loaders.codelist_reader import (
    enum_number_from_path,
    parse_entry,
    parse_name,
    parse_text,
    read_file,
    read_folder,
)
from codelist_sync.process.errors import CodeListParseError


class TestEnumNumberFromPath:
    """Enum number comes from the trailing digits of the stem."""

    def test_zero_padded_number(self):
        assert enum_number_from_path(Path('code0035.edt')) == 35

    def test_number_only_stem(self):
        assert enum_number_from_path(Path('/lists/125.edt')) == 125

    def test_no_trailing_digits(self):
        assert enum_number_from_path(Path('codes_v2a.edt')) is None


class TestParseName:
    """Name is taken from the second line comment."""

    def test_name_with_count_suffix(self):
        lines = ['; export', '; 0035, Approval Status (10)']
        assert parse_name(lines) == 'Approval Status'

    def test_name_without_suffix(self):
        lines = ['; export', ';0035, Fluid Code']
        assert parse_name(lines) == 'Fluid Code'

    def test_second_line_not_a_comment(self):
        lines = ['; export', "1 = 'A'"]
        assert parse_name(lines) is None

    def test_no_comma(self):
        lines = ['; export', '; Approval Status']
        assert parse_name(lines) is None

    def test_single_line(self):
        assert parse_name(['; 0035, Approval Status']) is None


class TestParseEntry:
    """Entry lines: number = 'short=long'."""

    def test_short_and_long(self):
        entry = parse_entry("        3 = 'NA=Not approved'")

        assert entry.number == 3
        assert entry.short == 'NA'
        assert entry.long == 'Not approved'

    def test_short_is_trimmed(self):
        entry = parse_entry("2 = 'A =Approved'")
        assert entry.short == 'A'

    def test_single_space_placeholder_is_blank(self):
        entry = parse_entry("1 = ' '")

        assert entry.short == ''
        assert entry.long is None

    def test_empty_long_is_none(self):
        entry = parse_entry("4 = 'X='")
        assert entry.long is None

    def test_comment_line(self):
        assert parse_entry("; 5 = 'Y'") is None

    def test_blank_line(self):
        assert parse_entry('   ') is None

    def test_non_entry_line(self):
        assert parse_entry('END') is None


class TestParseText:
    """Whole-file parsing."""

    def test_sample_file(self, sample_edt_text):
        code_list = parse_text(sample_edt_text, 35)

        assert code_list.enum_number == 35
        assert code_list.name == 'Approval Status'
        assert code_list.list_uid == 'PDS3DEnumList_35'
        assert sorted(code_list.entries) == [1, 2, 3]
        assert code_list.entries[1].short == ''
        assert code_list.entries[2].long == 'Approved'

    def test_duplicate_number_last_wins(self):
        text = "; x\n; 0001, Dup\n1 = 'A'\n1 = 'B'\n"
        code_list = parse_text(text, 1)

        assert len(code_list) == 1
        assert code_list.entries[1].short == 'B'

    def test_empty_input_raises(self):
        with pytest.raises(CodeListParseError):
            parse_text('  \n ', 1)


class TestReadFile:
    """Single file reading."""

    def test_reads_utf8_with_bom(self, temp_dir, sample_edt_text):
        path = temp_dir / 'code0035.edt'
        path.write_text(sample_edt_text, encoding='utf-8-sig')

        code_list, reason = read_file(path)

        assert reason is None
        assert code_list.name == 'Approval Status'
        assert code_list.source == path

    def test_skips_file_without_number(self, temp_dir, sample_edt_text):
        path = temp_dir / 'approval.edt'
        path.write_text(sample_edt_text, encoding='utf-8')

        code_list, reason = read_file(path)

        assert code_list is None
        assert 'enum number' in reason


class TestReadFolder:
    """Folder reading isolates failures per file."""

    def test_mixed_folder(self, temp_dir, sample_edt_text):
        (temp_dir / 'code0035.edt').write_text(sample_edt_text, encoding='utf-8')
        (temp_dir / 'nonumber.edt').write_text(sample_edt_text, encoding='utf-8')
        (temp_dir / 'code0040.edt').write_text('', encoding='utf-8')
        sub = temp_dir / 'more'
        sub.mkdir()
        (sub / 'code0036.edt').write_text("; x\n; 0036, Other\n1 = 'Q'\n", encoding='utf-8')

        result = read_folder(temp_dir)

        assert sorted(c.enum_number for c in result.code_lists) == [35, 36]
        assert temp_dir / 'nonumber.edt' in result.skipped
        assert temp_dir / 'code0040.edt' in result.failed

    def test_non_recursive(self, temp_dir, sample_edt_text):
        sub = temp_dir / 'more'
        sub.mkdir()
        (sub / 'code0036.edt').write_text(sample_edt_text, encoding='utf-8')

        result = read_folder(temp_dir, recursive=False)

        assert result.code_lists == []

    def test_missing_folder(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            read_folder(temp_dir / 'missing')

    def test_invalid_utf8_byte_is_replaced(self, temp_dir):
        path = temp_dir / 'code0042.edt'
        path.write_bytes(b"; x\n; 0042, Temperature\n1 = 'C =Degrees \xb0C'\n")

        result = read_folder(temp_dir)

        assert result.failed == {}
        assert len(result.code_lists) == 1
        entry = result.code_lists[0].entries[1]
        assert entry.short == 'C'
        assert '\ufffd' in entry.long
