# Path: codelist_sync/loaders/hierarchy_reader.py
"""
Hierarchy Workbook Reader

Builds a MultiLevelHierarchy for each wanted sheet of an .xlsx
workbook.

Sheet layout:
- Level columns are the even columns (B, D, F, ...) whose header,
  somewhere in the first five rows, contains "Short Description"
- Each adjacent pair of level columns gives one parent -> children
  edge map, read from the row below the lower of the two headers
- Labels are normalized (trimmed, whitespace collapsed, lower case)
- Rows blank in both columns are skipped; a blank side is 'undefined'
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from openpyxl import load_workbook

from ..process.errors import HierarchyReadError
from ..process.hierarchy.lookup import normalize_name
from ..process.models.hierarchy import MultiLevelHierarchy
from .constants import (
    FIRST_LEVEL_COLUMN,
    HEADER_SEARCH_ROWS,
    LEVEL_COLUMN_STEP,
    LEVEL_HEADER_MARKER,
    MIN_LEVEL_COLUMNS,
)


logger = logging.getLogger('input.hierarchy_reader')

Row = Sequence[Any]


def cell_text(row: Row, column: int) -> str:
    """
    Trimmed text of a 1-based column in a row ('' when empty or absent).

    Whole-number floats are written without the fractional part.
    """
    if column < 1 or column > len(row):
        return ''
    value = row[column - 1]
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def detect_level_columns(rows: list[Row]) -> dict[int, int]:
    """
    Find level columns and their header rows.

    Args:
        rows: Sheet rows (tuples of cell values)

    Returns:
        Dict of 1-based column -> 1-based header row, sorted by column
    """
    width = max((len(row) for row in rows), default=0)
    header_rows: dict[int, int] = {}

    for row_number, row in enumerate(rows[:HEADER_SEARCH_ROWS], start=1):
        for column in range(FIRST_LEVEL_COLUMN, width + 1, LEVEL_COLUMN_STEP):
            if column in header_rows:
                continue
            if LEVEL_HEADER_MARKER in cell_text(row, column).lower():
                header_rows[column] = row_number

    return dict(sorted(header_rows.items()))


def build_hierarchy(rows: Iterable[Row], sheet_name: str = '') -> MultiLevelHierarchy:
    """
    Build the multi-level hierarchy of one sheet.

    Args:
        rows: Sheet rows (tuples of cell values, first row first)
        sheet_name: Sheet name for log messages

    Returns:
        MultiLevelHierarchy (empty when fewer than two level columns)
    """
    rows = list(rows)
    header_rows = detect_level_columns(rows)
    columns = list(header_rows)
    hierarchy = MultiLevelHierarchy(level_count=len(columns))

    if len(columns) < MIN_LEVEL_COLUMNS:
        logger.warning(
            f"Sheet '{sheet_name}': found {len(columns)} level column(s); "
            f"need at least {MIN_LEVEL_COLUMNS}. Skipping hierarchy build"
        )
        return hierarchy

    for level, (parent_col, child_col) in enumerate(zip(columns, columns[1:])):
        hierarchy.edges_per_level.append({})
        start_row = max(header_rows[parent_col], header_rows[child_col]) + 1

        for row in rows[start_row - 1:]:
            parent_label = cell_text(row, parent_col)
            child_label = cell_text(row, child_col)
            if not parent_label and not child_label:
                continue
            hierarchy.add_edge(
                level,
                normalize_name(parent_label),
                normalize_name(child_label),
                parent_label=' '.join(parent_label.split()),
                child_label=' '.join(child_label.split()),
            )

    logger.info(
        f"Sheet '{sheet_name}': detected {len(columns)} level(s) at columns "
        f"[{', '.join(str(c) for c in columns)}]. "
        f"Built {len(hierarchy.edges_per_level)} edge map(s)"
    )
    return hierarchy


def read_hierarchies(
    workbook_path: Path,
    sheet_names: Iterable[str]
) -> dict[str, MultiLevelHierarchy]:
    """
    Build hierarchies for the wanted sheets of a workbook.

    Args:
        workbook_path: Path to the .xlsx workbook
        sheet_names: Sheets to process (case-insensitive)

    Returns:
        Dict of sheet name (as written in the workbook) -> hierarchy

    Raises:
        HierarchyReadError: If the workbook is missing or unreadable
    """
    workbook_path = Path(workbook_path)
    if not workbook_path.is_file():
        raise HierarchyReadError(f"Workbook not found: {workbook_path}")

    wanted = {name.casefold() for name in sheet_names if name}

    try:
        workbook = load_workbook(str(workbook_path), read_only=True, data_only=True)
    except Exception as e:
        raise HierarchyReadError(f"Cannot open workbook {workbook_path}: {e}") from e

    hierarchies: dict[str, MultiLevelHierarchy] = {}
    try:
        for sheet in workbook.worksheets:
            if sheet.title.casefold() not in wanted:
                continue

            logger.info(f"Processing sheet: {sheet.title}")
            hierarchy = build_hierarchy(sheet.iter_rows(values_only=True), sheet.title)
            hierarchies[sheet.title] = hierarchy
            logger.info(
                f"Built {hierarchy.level_count}-level hierarchy for '{sheet.title}': "
                f"totalParents={hierarchy.total_parents}, "
                f"totalChildren={hierarchy.total_children}"
            )
    finally:
        workbook.close()

    missing = wanted - {title.casefold() for title in hierarchies}
    if missing:
        logger.warning(f"Sheets not found in workbook: {', '.join(sorted(missing))}")

    return hierarchies


__all__ = [
    'cell_text',
    'detect_level_columns',
    'build_hierarchy',
    'read_hierarchies',
]
