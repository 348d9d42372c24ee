# Path: codelist_sync/process/models/codelist.py
"""
Code List Models

Normalized in-memory record of one enumeration parsed from a code
list source. Created once per source and read-only for the engine.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...constants import map_list_uid


@dataclass
class CodeEntry:
    """
    One discrete value of a code list.

    Attributes:
        number: Value number (e.g., 2)
        short: Short label (e.g., "A"); empty string for a blank placeholder
        long: Optional long label (e.g., "Approved")
    """
    number: int
    short: str
    long: Optional[str] = None


@dataclass
class CodeList:
    """
    One enumeration with its values keyed by value number.

    Attributes:
        enum_number: Enumeration number (e.g., 35)
        name: Optional list name (e.g., "Approval Status")
        entries: Value number -> CodeEntry
        source: File the list was read from, if any

    Example:
        code_list = CodeList(enum_number=35, name="Approval Status")
        code_list.add_entry(CodeEntry(number=2, short="A", long="Approved"))
        code_list.list_uid  # "PDS3DEnumList_35"
    """
    enum_number: int
    name: Optional[str] = None
    entries: dict[int, CodeEntry] = field(default_factory=dict)
    source: Optional[Path] = field(default=None, repr=False)

    def add_entry(self, entry: CodeEntry) -> None:
        """Add an entry; a later entry with the same number replaces the earlier one."""
        self.entries[entry.number] = entry

    @property
    def list_uid(self) -> str:
        """Deterministic Map store UID of this list."""
        return map_list_uid(self.enum_number)

    @property
    def display_name(self) -> str:
        """Name for log messages."""
        return self.name if self.name else '(no name)'

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ['CodeEntry', 'CodeList']
