# Path: codelist_sync/loaders/constants.py
"""
Loaders Module Constants for codelist_sync

Constants for reading code list files, INI maps and hierarchy workbooks.
"""

# ==============================================================================
# CODE LIST FILES
# ==============================================================================

DEFAULT_CODELIST_PATTERN = '*.edt'
CODELIST_COMMENT_PREFIX = ';'
CODELIST_ENCODING = 'utf-8-sig'

SEPARATOR_LINE = '-' * 90

# ==============================================================================
# INI FILES
# ==============================================================================

INI_COMMENT_PREFIXES = (';', '#')
SHEETS_SECTION = '[sheets]'

# ==============================================================================
# HIERARCHY WORKBOOK
# ==============================================================================

# Header text marking a hierarchy level column (case-insensitive)
LEVEL_HEADER_MARKER = 'short description'

# Rows searched for level headers
HEADER_SEARCH_ROWS = 5

# Level columns are the even columns B, D, F, ... (1-based index)
FIRST_LEVEL_COLUMN = 2
LEVEL_COLUMN_STEP = 2

MIN_LEVEL_COLUMNS = 2


__all__ = [
    'DEFAULT_CODELIST_PATTERN',
    'CODELIST_COMMENT_PREFIX',
    'CODELIST_ENCODING',
    'SEPARATOR_LINE',
    'INI_COMMENT_PREFIXES',
    'SHEETS_SECTION',
    'LEVEL_HEADER_MARKER',
    'HEADER_SEARCH_ROWS',
    'FIRST_LEVEL_COLUMN',
    'LEVEL_COLUMN_STEP',
    'MIN_LEVEL_COLUMNS',
]
