# Path: codelist_sync/loaders/__init__.py
"""
codelist_sync Loaders Package

Readers for every external input of a reconciliation run.

Data Sources:
    - xml: ToolMap and SPF schema documents
    - codelist: .edt code list files
    - enum_sheet: enum number -> sheet map and sheet list INI files
    - hierarchy: spreadsheet hierarchy workbook (.xlsx)

Example:
    from codelist_sync.loaders import (
        load_document, read_folder, read_enum_sheet_map, read_hierarchies,
    )

    map_store = load_document(map_path, 'ToolMap')
    code_lists = read_folder(codelist_dir).code_lists
    enum_to_sheet = read_enum_sheet_map(ini_path)
    hierarchies = read_hierarchies(workbook_path, distinct_sheets(enum_to_sheet))
"""

from .xml_loader import create_parser, load_document, load_document_string
from .codelist_reader import (
    CodeListReadResult,
    parse_text,
    read_file,
    read_folder,
)
from .enum_sheet_reader import read_enum_sheet_map, distinct_sheets, read_sheet_names
from .hierarchy_reader import build_hierarchy, read_hierarchies


__all__ = [
    # XML
    'create_parser',
    'load_document',
    'load_document_string',

    # Code lists
    'CodeListReadResult',
    'parse_text',
    'read_file',
    'read_folder',

    # INI
    'read_enum_sheet_map',
    'distinct_sheets',
    'read_sheet_names',

    # Hierarchy
    'build_hierarchy',
    'read_hierarchies',
]
