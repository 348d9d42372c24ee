# Path: codelist_sync/process/store/placement.py
"""
Placement Strategies

New nodes are inserted near their kin so the edited documents stay
readable for people who diff them. A placement is an ordered list of
anchors; the first anchor that resolves inside the parent wins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...constants import (
    MAP_LIST_TAG,
    MAP_VALUE_TAG,
    RELATION_TAG,
    TARGET_LIST_TAG,
    TARGET_VALUE_TAG,
)


class AnchorKind(str, Enum):
    """Where to insert relative to the parent's children."""
    AFTER_LAST = 'after_last'
    FIRST_CHILD = 'first_child'
    LAST_CHILD = 'last_child'


@dataclass(frozen=True)
class Anchor:
    """
    One placement attempt.

    Attributes:
        kind: Anchor kind
        tag: Sibling tag for AFTER_LAST (ignored otherwise)
    """
    kind: AnchorKind
    tag: Optional[str] = None

    @classmethod
    def after_last(cls, tag: str) -> 'Anchor':
        return cls(AnchorKind.AFTER_LAST, tag)

    @classmethod
    def first_child(cls) -> 'Anchor':
        return cls(AnchorKind.FIRST_CHILD)

    @classmethod
    def last_child(cls) -> 'Anchor':
        return cls(AnchorKind.LAST_CHILD)


@dataclass(frozen=True)
class Placement:
    """
    Ordered anchors tried in turn.

    When no anchor resolves the node becomes the last child.
    """
    anchors: tuple[Anchor, ...]

    def describe(self) -> str:
        return ' | '.join(
            f"{anchor.kind.value}:{anchor.tag}" if anchor.tag else anchor.kind.value
            for anchor in self.anchors
        )


MAP_LIST_PLACEMENT = Placement((Anchor.last_child(),))

MAP_VALUE_PLACEMENT = Placement((
    Anchor.after_last(MAP_VALUE_TAG),
    Anchor.after_last(MAP_LIST_TAG),
    Anchor.last_child(),
))

RELATION_PLACEMENT = Placement((
    Anchor.after_last(RELATION_TAG),
    Anchor.last_child(),
))

TARGET_LIST_PLACEMENT = Placement((
    Anchor.after_last(TARGET_LIST_TAG),
    Anchor.first_child(),
))

TARGET_VALUE_PLACEMENT = Placement((
    Anchor.after_last(TARGET_VALUE_TAG),
    Anchor.after_last(TARGET_LIST_TAG),
    Anchor.last_child(),
))


__all__ = [
    'AnchorKind',
    'Anchor',
    'Placement',
    'MAP_LIST_PLACEMENT',
    'MAP_VALUE_PLACEMENT',
    'RELATION_PLACEMENT',
    'TARGET_LIST_PLACEMENT',
    'TARGET_VALUE_PLACEMENT',
]
