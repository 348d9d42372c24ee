# Path: codelist_sync/constants.py
"""
System-Wide Constants for codelist_sync

Central repository for the element names, attribute names, relation
definitions and identifier formats shared by both schema documents.
Attribute and tag names are case-sensitive and must be preserved exactly;
both the ToolMap schema and the SPF schema are consumed by other tools.

Constants are organized by category:
- Shared node shapes (IObject, Rel)
- Map store (ToolMap schema) shapes
- Target store (SPF schema) shapes
- Relation definitions
- Identifier formats
- Operation statuses
- Display markers
"""

from enum import Enum
from typing import Final


# ==============================================================================
# SHARED NODE SHAPES
# ==============================================================================

OBJECT_TAG: Final[str] = 'IObject'
"""Child element carrying the identity of every domain node."""

UID_ATTR: Final[str] = 'UID'
NAME_ATTR: Final[str] = 'Name'
DESCRIPTION_ATTR: Final[str] = 'Description'

RELATION_TAG: Final[str] = 'Rel'
RELATION_BODY_TAG: Final[str] = 'IRel'
UID1_ATTR: Final[str] = 'UID1'
UID2_ATTR: Final[str] = 'UID2'
DEF_UID_ATTR: Final[str] = 'DefUID'


# ==============================================================================
# MAP STORE (TOOLMAP SCHEMA)
# ==============================================================================

MAP_LIST_TAG: Final[str] = 'SPMapEnumListDef'
MAP_VALUE_TAG: Final[str] = 'SPMapEnumDef'
MAP_OBJECT_MARKER_TAG: Final[str] = 'IMapObject'
MAP_LIST_DEF_TAG: Final[str] = 'IMapEnumListDef'
MAP_LIST_CRITERIA_ATTR: Final[str] = 'ProcessEnumListCriteria'
MAP_VALUE_DEF_TAG: Final[str] = 'IMapEnumDef'
MAP_VALUE_NUMBER_ATTR: Final[str] = 'MapEnumNumber'


# ==============================================================================
# TARGET STORE (SPF SCHEMA)
# ==============================================================================

TARGET_LIST_TAG: Final[str] = 'EnumListType'
TARGET_VALUE_TAG: Final[str] = 'EnumEnum'
SCHEMA_OBJECT_TAG: Final[str] = 'ISchemaObj'
PROPERTY_TYPE_TAG: Final[str] = 'IPropertyType'
ENUM_NUMBER_TAG: Final[str] = 'IEnumEnum'
ENUM_NUMBER_ATTR: Final[str] = 'EnumNumber'


# ==============================================================================
# RELATION DEFINITIONS (IRel/@DefUID)
# ==============================================================================

class RelationDef(str, Enum):
    """
    Relation kinds used by the reconciliation.

    LIST_HAS_VALUE: Map list -> Map value (same document)
    LIST_TO_LIST: Map list -> Target list (cross document)
    VALUE_TO_VALUE: Map value -> Target value (cross document)
    CONTAINS: Target list -> Target value (same document)
    """
    LIST_HAS_VALUE = 'MapEnumListMapEnum'
    LIST_TO_LIST = 'MapEnumListToEnumList'
    VALUE_TO_VALUE = 'MapEnumToEnum'
    CONTAINS = 'Contains'


# ==============================================================================
# IDENTIFIER FORMATS
# ==============================================================================

MAP_LIST_UID_PREFIX: Final[str] = 'PDS3DEnumList_'
MAP_LIST_UID_PATTERN: Final[str] = r'^PDS3DEnumList_(\d+)$'
LIST_HAS_VALUE_REL_FORMAT: Final[str] = '{list_uid}-HasValue-{value_number}'
VALUE_TO_VALUE_REL_FORMAT: Final[str] = '{value_uid}-MapsTo-Enum'

UNDEFINED_NAME: Final[str] = 'undefined'
"""Name given to Map value nodes (and hierarchy keys) whose label is blank."""


def map_list_uid(enum_number: int) -> str:
    """Deterministic Map store UID of the list with the given enum number."""
    return f"{MAP_LIST_UID_PREFIX}{enum_number}"


def map_value_uid(list_uid: str, value_number: int) -> str:
    """Deterministic Map store UID of a value inside a list."""
    return f"{list_uid}_{value_number}"


# ==============================================================================
# OPERATION STATUSES
# ==============================================================================

class OpStatus(str, Enum):
    """Outcome of a single ensure-operation."""
    CREATED = 'created'
    EXISTS = 'exists'
    UPDATED = 'updated'
    SKIPPED = 'skipped'


class ListDefStatus(str, Enum):
    """Outcome of ensuring a Map list definition."""
    CREATED = 'created'
    EXISTS = 'exists'
    NAME_MISMATCH = 'name_mismatch'


class SkipReason(str, Enum):
    """Why the containment step did not run for an entry."""
    NO_HIERARCHY_DATA = 'no_hierarchy_data'
    NO_PARENT_IN_HIERARCHY = 'no_parent_in_hierarchy'
    NO_RESOLVED_VALUE = 'no_resolved_value'
    BLANK_RELATION_TARGET = 'blank_relation_target'


class TieBreakPolicy(str, Enum):
    """
    Rule used when several Target nodes match equally well.

    LOWEST_UID: lexicographically smallest UID (stable across runs)
    FIRST_FOUND: first node in search order (document order)
    """
    LOWEST_UID = 'lowest_uid'
    FIRST_FOUND = 'first_found'


DEFAULT_TIE_BREAK_POLICY: Final[TieBreakPolicy] = TieBreakPolicy.LOWEST_UID


# ==============================================================================
# DISPLAY MARKERS
# ==============================================================================

STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'
STATUS_INFO: Final[str] = '[INFO]'

MENU_HEADER: Final[str] = '=' * 70
MENU_SEPARATOR: Final[str] = '-' * 68
