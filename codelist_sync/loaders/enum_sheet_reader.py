# Path: codelist_sync/loaders/enum_sheet_reader.py
"""
Enum-to-Sheet and Sheet List Readers

Two small INI-like formats:

Enum map (one "EnumNumber=SheetName" per line):
    ; comment
    125=FluidCode
    130=PipeCodes

Sheet list ([Sheets] section, or plain lines when there is none):
    [Sheets]
    1=FluidCode
    PipeCodes

Lines starting with ';' or '#' are comments. Malformed lines are skipped.
"""

import logging
from pathlib import Path

from .constants import INI_COMMENT_PREFIXES, SHEETS_SECTION


logger = logging.getLogger('input.enum_sheet_reader')


def _content_lines(path: Path) -> list[str]:
    """Trimmed, non-blank, non-comment lines of a file."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"INI file not found: {path}")

    lines = []
    for raw in path.read_text(encoding='utf-8-sig').splitlines():
        line = raw.strip()
        if not line or line.startswith(INI_COMMENT_PREFIXES):
            continue
        lines.append(line)
    return lines


def read_enum_sheet_map(path: Path) -> dict[int, str]:
    """
    Read the enum number -> sheet name map.

    Args:
        path: INI file path

    Returns:
        Dict of enum number to sheet name (last duplicate wins)

    Raises:
        FileNotFoundError: If the file does not exist
    """
    mapping: dict[int, str] = {}
    skipped = 0

    for line in _content_lines(path):
        key, sep, value = line.partition('=')
        key, value = key.strip(), value.strip()
        if not sep or not key or not value:
            skipped += 1
            continue
        try:
            enum_number = int(key)
        except ValueError:
            skipped += 1
            continue
        mapping[enum_number] = value

    logger.info(f"Read {len(mapping)} enum->sheet mapping(s) from {path} ({skipped} line(s) skipped)")
    return mapping


def distinct_sheets(enum_to_sheet: dict[int, str]) -> list[str]:
    """
    Distinct sheet names, case-insensitive, in first-seen order.

    Example:
        distinct_sheets({1: 'Fluid', 2: 'FLUID', 3: 'Pipe'})  # ['Fluid', 'Pipe']
    """
    seen = set()
    sheets = []
    for name in (enum_to_sheet or {}).values():
        if not name:
            continue
        key = name.casefold()
        if key not in seen:
            seen.add(key)
            sheets.append(name)
    return sheets


def read_sheet_names(path: Path) -> list[str]:
    """
    Read sheet names from a sheet list file.

    Uses the [Sheets] section (values of "key=Name" lines or the whole
    line) when present, otherwise every plain non-section line.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    lines = _content_lines(path)
    names = []
    in_sheets = False

    for line in lines:
        if line.startswith('[') and line.endswith(']'):
            in_sheets = line.lower() == SHEETS_SECTION
            continue
        if in_sheets:
            _, sep, value = line.partition('=')
            name = value.strip() if sep else line
            if name:
                names.append(name)

    if not names:
        names = [line for line in lines if not line.startswith('[')]

    logger.info(f"Read {len(names)} sheet name(s) from {path}")
    return names


__all__ = ['read_enum_sheet_map', 'distinct_sheets', 'read_sheet_names']
