# Path: codelist_sync/process/store/__init__.py
"""
Tree Document Store Package

Indexed sessions over the ToolMap and SPF schema documents.

Components:
- DocumentStore: identity, name and relation queries plus inserts
- Placement: "insert near kin" strategies
- elements: node builders and readers
- UidGenerator: opaque identifiers for new Target nodes
"""

from .document_store import DocumentStore
from .placement import (
    AnchorKind,
    Anchor,
    Placement,
    MAP_LIST_PLACEMENT,
    MAP_VALUE_PLACEMENT,
    RELATION_PLACEMENT,
    TARGET_LIST_PLACEMENT,
    TARGET_VALUE_PLACEMENT,
)
from .uid_generator import UidGenerator, SequentialUidGenerator

__all__ = [
    'DocumentStore',
    'AnchorKind',
    'Anchor',
    'Placement',
    'MAP_LIST_PLACEMENT',
    'MAP_VALUE_PLACEMENT',
    'RELATION_PLACEMENT',
    'TARGET_LIST_PLACEMENT',
    'TARGET_VALUE_PLACEMENT',
    'UidGenerator',
    'SequentialUidGenerator',
]
