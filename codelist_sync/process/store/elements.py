# Path: codelist_sync/process/store/elements.py
"""
Element Builders and Readers

Builds the exact node shapes both schemas expect and reads identity
and relation attributes from existing nodes. Tag and attribute names
come from constants and are never rewritten.

Shapes:
    <SPMapEnumListDef><IObject UID Name/><IMapObject/>
        <IMapEnumListDef ProcessEnumListCriteria=""/></SPMapEnumListDef>
    <SPMapEnumDef><IObject UID Name Description=""/><IMapObject/>
        <IMapEnumDef MapEnumNumber/></SPMapEnumDef>
    <EnumListType><IObject UID Name/><ISchemaObj/><IPropertyType/>
        [<IEnumEnum EnumNumber/>]</EnumListType>
    <EnumEnum><IObject UID Name [Description]/><ISchemaObj/>
        <IEnumEnum EnumNumber/></EnumEnum>
    <Rel><IObject UID/><IRel UID1 UID2 DefUID/></Rel>
"""

from typing import Optional

from lxml import etree

from ...constants import (
    OBJECT_TAG,
    UID_ATTR,
    NAME_ATTR,
    DESCRIPTION_ATTR,
    RELATION_TAG,
    RELATION_BODY_TAG,
    UID1_ATTR,
    UID2_ATTR,
    DEF_UID_ATTR,
    MAP_LIST_TAG,
    MAP_VALUE_TAG,
    MAP_OBJECT_MARKER_TAG,
    MAP_LIST_DEF_TAG,
    MAP_LIST_CRITERIA_ATTR,
    MAP_VALUE_DEF_TAG,
    MAP_VALUE_NUMBER_ATTR,
    TARGET_LIST_TAG,
    TARGET_VALUE_TAG,
    SCHEMA_OBJECT_TAG,
    PROPERTY_TYPE_TAG,
    ENUM_NUMBER_TAG,
    ENUM_NUMBER_ATTR,
)


# ==============================================================================
# READERS
# ==============================================================================

def object_element(node: etree._Element) -> Optional[etree._Element]:
    """Return the IObject child of a domain node, if present."""
    return node.find(OBJECT_TAG)


def object_uid(node: etree._Element) -> Optional[str]:
    """Return IObject/@UID of a domain node (None when absent)."""
    obj = object_element(node)
    if obj is None:
        return None
    return obj.get(UID_ATTR)


def object_name(node: etree._Element) -> Optional[str]:
    """Return IObject/@Name of a domain node (None when absent)."""
    obj = object_element(node)
    if obj is None:
        return None
    return obj.get(NAME_ATTR)


def relation_body(rel: etree._Element) -> Optional[etree._Element]:
    """Return the IRel child of a Rel node, if present."""
    return rel.find(RELATION_BODY_TAG)


def relation_triple(rel: etree._Element) -> Optional[tuple[str, str, str]]:
    """
    Read (UID1, UID2, DefUID) from a Rel node.

    Missing attributes read as empty strings. Returns None when the
    Rel has no IRel child.
    """
    body = relation_body(rel)
    if body is None:
        return None
    return (
        body.get(UID1_ATTR, ''),
        body.get(UID2_ATTR, ''),
        body.get(DEF_UID_ATTR, ''),
    )


# ==============================================================================
# BUILDERS
# ==============================================================================

def _object(parent: etree._Element, uid: str, name: Optional[str] = None) -> etree._Element:
    obj = etree.SubElement(parent, OBJECT_TAG)
    obj.set(UID_ATTR, uid)
    if name is not None:
        obj.set(NAME_ATTR, name)
    return obj


def build_map_list(uid: str, name: str) -> etree._Element:
    """Build an SPMapEnumListDef node."""
    node = etree.Element(MAP_LIST_TAG)
    _object(node, uid, name)
    etree.SubElement(node, MAP_OBJECT_MARKER_TAG)
    etree.SubElement(node, MAP_LIST_DEF_TAG).set(MAP_LIST_CRITERIA_ATTR, '')
    return node


def build_map_value(uid: str, name: str, value_number: int) -> etree._Element:
    """Build an SPMapEnumDef node with an empty Description."""
    node = etree.Element(MAP_VALUE_TAG)
    _object(node, uid, name).set(DESCRIPTION_ATTR, '')
    etree.SubElement(node, MAP_OBJECT_MARKER_TAG)
    etree.SubElement(node, MAP_VALUE_DEF_TAG).set(MAP_VALUE_NUMBER_ATTR, str(value_number))
    return node


def build_target_list(
    uid: str,
    name: str,
    enum_number: Optional[int] = None
) -> etree._Element:
    """
    Build an EnumListType node.

    The IEnumEnum marker is only written when an enum number is known.
    """
    node = etree.Element(TARGET_LIST_TAG)
    _object(node, uid, name)
    etree.SubElement(node, SCHEMA_OBJECT_TAG)
    etree.SubElement(node, PROPERTY_TYPE_TAG)
    if enum_number is not None:
        etree.SubElement(node, ENUM_NUMBER_TAG).set(ENUM_NUMBER_ATTR, str(enum_number))
    return node


def build_target_value(
    uid: str,
    name: str,
    value_number: int,
    description: Optional[str] = None
) -> etree._Element:
    """Build an EnumEnum node; Description is only written when non-empty."""
    node = etree.Element(TARGET_VALUE_TAG)
    obj = _object(node, uid, name)
    if description:
        obj.set(DESCRIPTION_ATTR, description)
    etree.SubElement(node, SCHEMA_OBJECT_TAG)
    etree.SubElement(node, ENUM_NUMBER_TAG).set(ENUM_NUMBER_ATTR, str(value_number))
    return node


def build_relation(uid: str, uid1: str, uid2: str, def_uid: str) -> etree._Element:
    """Build a Rel node."""
    node = etree.Element(RELATION_TAG)
    _object(node, uid)
    body = etree.SubElement(node, RELATION_BODY_TAG)
    body.set(UID1_ATTR, uid1)
    body.set(UID2_ATTR, uid2)
    body.set(DEF_UID_ATTR, def_uid)
    return node


__all__ = [
    'object_element',
    'object_uid',
    'object_name',
    'relation_body',
    'relation_triple',
    'build_map_list',
    'build_map_value',
    'build_target_list',
    'build_target_value',
    'build_relation',
]
