# Path: codelist_sync/process/store/uid_generator.py
"""
UID Generators

Opaque identifiers for new Target store nodes. The generator is
injected into the engines so tests can use predictable values.
"""

import uuid


class UidGenerator:
    """
    Default generator: braced upper-case UUID4.

    Example:
        UidGenerator().new_uid()  # "{3F2504E0-4F89-41D3-9A0C-0305E82C3301}"
    """

    def new_uid(self) -> str:
        return '{' + str(uuid.uuid4()).upper() + '}'


class SequentialUidGenerator(UidGenerator):
    """
    Deterministic generator producing "<prefix>0001", "<prefix>0002", ...

    Args:
        prefix: Text placed before the counter
        start: First counter value
    """

    def __init__(self, prefix: str = 'GEN-', start: int = 1):
        self.prefix = prefix
        self._next = start

    def new_uid(self) -> str:
        uid = f"{self.prefix}{self._next:04d}"
        self._next += 1
        return uid


__all__ = ['UidGenerator', 'SequentialUidGenerator']
