# Path: codelist_sync/tests/unit/test_hierarchy_reader.py
"""
Unit Tests for the Hierarchy Workbook Reader

Workbooks are built with openpyxl in a temporary directory.
"""

import pytest
from openpyxl import Workbook

from codelist_sync.loaders.hierarchy_reader import (
    build_hierarchy,
    cell_text,
    detect_level_columns,
    read_hierarchies,
)
from codelist_sync.process.errors import HierarchyReadError


HEADER = ('Code', 'Short Description', 'Code', 'Short Description')

ROWS = [
    ('Fluid hierarchy',),
    HEADER,
    (1, 'Fluid  Systems', 10, 'HX'),
    (1, 'Fluid Systems', 11, 'Pump'),
    (2, 'Utilities', 20, 'Water'),
    (None, None, None, None),
    (3, '', 30, 'Orphan'),
]


@pytest.fixture
def workbook_path(temp_dir):
    """Workbook with a Fluids sheet and an unrelated sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = 'Fluids'
    for row in ROWS:
        sheet.append(list(row))
    other = workbook.create_sheet('Notes')
    other.append(['just text'])

    path = temp_dir / 'Hierarchy.xlsx'
    workbook.save(str(path))
    return path


class TestCellText:
    """Cell value conversion."""

    def test_trims(self):
        assert cell_text(('a', '  HX '), 2) == 'HX'

    def test_whole_float(self):
        assert cell_text((12.0,), 1) == '12'

    def test_out_of_range_and_none(self):
        assert cell_text(('a',), 3) == ''
        assert cell_text((None,), 1) == ''


class TestBuildHierarchy:
    """Level detection and edges."""

    def test_detects_even_level_columns(self):
        assert detect_level_columns(ROWS) == {2: 2, 4: 2}

    def test_builds_normalized_edges(self):
        hierarchy = build_hierarchy(ROWS, 'Fluids')

        assert hierarchy.level_count == 2
        assert hierarchy.deepest_pair == {
            'fluid systems': {'hx', 'pump'},
            'utilities': {'water'},
            'undefined': {'orphan'},
        }
        assert hierarchy.display_name('fluid systems') == 'Fluid Systems'

    def test_single_level_is_empty(self):
        rows = [('Code', 'Short Description'), (1, 'HX')]

        hierarchy = build_hierarchy(rows, 'Flat')

        assert hierarchy.is_empty
        assert hierarchy.level_count == 1

    def test_three_levels(self):
        rows = [
            ('', 'Short Description', '', 'Short Description', '', 'Short Description'),
            ('', 'Plant', '', 'Fluid Systems', '', 'HX'),
        ]

        hierarchy = build_hierarchy(rows)

        assert len(hierarchy.edges_per_level) == 2
        assert hierarchy.edges_per_level[0] == {'plant': {'fluid systems'}}
        assert hierarchy.deepest_pair == {'fluid systems': {'hx'}}


class TestReadHierarchies:
    """Workbook level reading."""

    def test_reads_wanted_sheets_case_insensitively(self, workbook_path):
        hierarchies = read_hierarchies(workbook_path, ['FLUIDS', 'Missing'])

        assert list(hierarchies) == ['Fluids']
        assert 'utilities' in hierarchies['Fluids'].deepest_pair

    def test_missing_workbook(self, temp_dir):
        with pytest.raises(HierarchyReadError):
            read_hierarchies(temp_dir / 'none.xlsx', ['Fluids'])

    def test_unreadable_workbook(self, temp_dir):
        path = temp_dir / 'broken.xlsx'
        path.write_text('not a workbook', encoding='utf-8')

        with pytest.raises(HierarchyReadError):
            read_hierarchies(path, ['Fluids'])
