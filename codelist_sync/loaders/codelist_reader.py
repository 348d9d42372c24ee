# Path: codelist_sync/loaders/codelist_reader.py
"""
Code List Reader

Reads .edt code list files into CodeList records.

File format:
    ; first comment line
    ; 0035, Approval Status (10)
            1 = ' '
            2 = 'A =Approved'
            3 = 'NA=Not approved'

- Enum number: trailing digits of the file stem (code0035.edt -> 35)
- Name: second line when it is a ';' comment, text after the first
  comma with a trailing "(...)" removed
- Entries: number = 'payload'; payload split at the first '=' into a
  trimmed short label and an optional long label

Files are isolated from each other: one unreadable file is logged
and reported, never fatal for the folder.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..process.errors import CodeListParseError
from ..process.models.codelist import CodeEntry, CodeList
from .constants import (
    CODELIST_COMMENT_PREFIX,
    CODELIST_ENCODING,
    DEFAULT_CODELIST_PATTERN,
    SEPARATOR_LINE,
)


logger = logging.getLogger('input.codelist_reader')

ENTRY_PATTERN = re.compile(r"^\s*(?P<n>\d+)\s*=\s*'(?P<payload>[^']*)'")
TRAILING_NUMBER_PATTERN = re.compile(r'(\d+)$')


@dataclass
class CodeListReadResult:
    """
    Result of reading a folder of code list files.

    Attributes:
        code_lists: Successfully parsed code lists
        skipped: File -> reason, for files without an enum number
        failed: File -> error message, for files that raised
    """
    code_lists: list[CodeList] = field(default_factory=list)
    skipped: dict[Path, str] = field(default_factory=dict)
    failed: dict[Path, str] = field(default_factory=dict)


def enum_number_from_path(path: Path) -> Optional[int]:
    """Trailing digits of the file stem, or None."""
    match = TRAILING_NUMBER_PATTERN.search(Path(path).stem)
    return int(match.group(1)) if match else None


def parse_name(lines: list[str]) -> Optional[str]:
    """
    Extract the list name from the second line.

    Example:
        parse_name(['; header', '; 0035, Approval Status (10)'])
        # 'Approval Status'
    """
    if len(lines) < 2:
        return None

    second = lines[1].strip()
    if not second.startswith(CODELIST_COMMENT_PREFIX):
        return None

    comment = second.lstrip(CODELIST_COMMENT_PREFIX).strip()
    comma = comment.find(',')
    if comma < 0 or comma + 1 >= len(comment):
        return None

    name = comment[comma + 1:].strip()
    paren = name.rfind('(')
    if paren > 0:
        name = name[:paren].strip()

    return name or None


def parse_entry(line: str) -> Optional[CodeEntry]:
    """
    Parse one entry line.

    Returns:
        CodeEntry, or None for comments, blank and non-entry lines
    """
    if not line.strip() or line.lstrip().startswith(CODELIST_COMMENT_PREFIX):
        return None

    match = ENTRY_PATTERN.match(line)
    if not match:
        return None

    payload = match.group('payload')
    short, sep, long = payload.partition('=')
    # ' ' placeholder strips to a blank label
    short = short.strip()
    long = long.strip() if sep else None

    return CodeEntry(
        number=int(match.group('n')),
        short=short,
        long=long or None,
    )


def parse_text(text: str, enum_number: int, source: Optional[Path] = None) -> CodeList:
    """
    Parse .edt content for a known enum number.

    Args:
        text: File content
        enum_number: Enum number (from the file name)
        source: File the content came from, for error messages

    Returns:
        CodeList with entries keyed by number (last duplicate wins)

    Raises:
        CodeListParseError: If the content is empty
    """
    if not text or not text.strip():
        raise CodeListParseError("Input is empty", source)

    lines = text.splitlines()
    code_list = CodeList(enum_number=enum_number, name=parse_name(lines), source=source)

    for line in lines:
        entry = parse_entry(line)
        if entry is not None:
            code_list.add_entry(entry)

    return code_list


def read_file(path: Path) -> tuple[Optional[CodeList], Optional[str]]:
    """
    Read one .edt file.

    Returns:
        Tuple of (code list, skip reason); the code list is None when
        the enum number cannot be determined from the file name

    Raises:
        CodeListParseError: If the content is empty
        OSError: If the file cannot be read
    """
    path = Path(path)
    enum_number = enum_number_from_path(path)
    if enum_number is None:
        return None, "Could not determine enum number from filename"

    # utf-8-sig honours a BOM; undecodable bytes become U+FFFD
    text = path.read_text(encoding=CODELIST_ENCODING, errors='replace')
    return parse_text(text, enum_number, source=path), None


def read_folder(
    folder: Path,
    pattern: str = DEFAULT_CODELIST_PATTERN,
    recursive: bool = True
) -> CodeListReadResult:
    """
    Read every code list file in a folder.

    Args:
        folder: Folder to search
        pattern: Glob pattern for code list files
        recursive: Search subfolders too

    Returns:
        CodeListReadResult with parsed, skipped and failed files

    Raises:
        FileNotFoundError: If the folder does not exist
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Codelist folder not found: {folder}")

    files = sorted(folder.rglob(pattern) if recursive else folder.glob(pattern))
    result = CodeListReadResult()
    logger.info(f"Reading {len(files)} code list file(s) from {folder}")

    for path in files:
        logger.debug(SEPARATOR_LINE)
        logger.debug(f"Processing codelist: {path}")
        try:
            code_list, skip_reason = read_file(path)
        except Exception as e:
            logger.error(f"Failed to parse: {path.name} - {e}")
            result.failed[path] = str(e)
            continue

        if code_list is None:
            logger.warning(f"Skipped: {path.name} - {skip_reason}")
            result.skipped[path] = skip_reason
            continue

        result.code_lists.append(code_list)
        logger.info(
            f"Processed: {path.name} (Enum={code_list.enum_number}, "
            f"Name='{code_list.display_name}', Entries={len(code_list)})"
        )

    logger.info(
        f"Code lists read: {len(result.code_lists)} parsed, "
        f"{len(result.skipped)} skipped, {len(result.failed)} failed"
    )
    return result


__all__ = [
    'CodeListReadResult',
    'enum_number_from_path',
    'parse_name',
    'parse_entry',
    'parse_text',
    'read_file',
    'read_folder',
]
