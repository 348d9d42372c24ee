# Path: codelist_sync/process/enum_list/list_scanner.py
"""
EnumList Relation Scanner

Walks every SPMapEnumListDef of the Map store, follows its
MapEnumListToEnumList relation and makes sure the Target store holds
the EnumListType the relation points at.

Missing relations are reported, never created. A missing Target list
is created with the relation's UID2 so the existing link stays valid.
"""

import re
from typing import Optional

from lxml import etree

from ...constants import (
    UID_ATTR,
    MAP_LIST_TAG,
    MAP_LIST_UID_PATTERN,
    TARGET_LIST_TAG,
    RelationDef,
)
from ...core.logger.ipo_logging import get_process_logger, log_success
from ..errors import DocumentStructureError
from ..models.outcomes import EnumListScanResult, ItemFailure
from ..store.document_store import DocumentStore
from ..store.elements import (
    build_target_list,
    object_element,
    object_name,
    object_uid,
    relation_triple,
)
from ..store.placement import TARGET_LIST_PLACEMENT


_UID_PATTERN = re.compile(MAP_LIST_UID_PATTERN)


class EnumListScanner:
    """
    Scans Map list definitions against the Target store.

    Example:
        scanner = EnumListScanner(map_store, target_store)
        for result in scanner.scan():
            if not result.relation_exists:
                ...
    """

    def __init__(self, map_store: DocumentStore, target_store: DocumentStore):
        self.map_store = map_store
        self.target_store = target_store
        self.logger = get_process_logger('enum_list.scanner')

    def scan(
        self,
        failures: Optional[list[ItemFailure]] = None
    ) -> list[EnumListScanResult]:
        """
        Scan all Map list definitions in document order.

        A list definition that raises is logged and skipped; the others
        are still scanned.

        Args:
            failures: Receives one ItemFailure per list definition that raised

        Returns:
            One EnumListScanResult per list definition with a UID

        Raises:
            DocumentStructureError: If either store has no root
        """
        self.target_store.require_root()
        list_defs = list(self.map_store.iter_nodes(MAP_LIST_TAG))
        self.logger.info(f"Found {len(list_defs)} SPMapEnumListDef node(s) in ToolMap")

        results = []
        for list_def in list_defs:
            try:
                result = self._scan_one(list_def)
            except DocumentStructureError:
                raise
            except Exception as e:
                item = f"{object_uid(list_def) or MAP_LIST_TAG} (scan)"
                self.logger.error(f"Failed to scan {item}: {e}", exc_info=True)
                if failures is not None:
                    failures.append(ItemFailure(item=item, reason=str(e)))
                continue
            if result is not None:
                results.append(result)

        self.logger.info(
            f"Completed EnumList scan: {len(results)} list(s), "
            f"{sum(1 for r in results if not r.relation_exists)} without relation, "
            f"{sum(1 for r in results if r.target_list_created)} Target list(s) created"
        )
        return results

    def _scan_one(self, list_def: etree._Element) -> Optional[EnumListScanResult]:
        obj = object_element(list_def)
        if obj is None:
            self.logger.warning("SPMapEnumListDef without <IObject> encountered. Skipping")
            return None

        uid1 = obj.get(UID_ATTR)
        if not uid1 or not uid1.strip():
            self.logger.warning("SPMapEnumListDef has empty IObject@UID. Skipping")
            return None

        map_name = object_name(list_def)
        match = _UID_PATTERN.match(uid1)
        result = EnumListScanResult(
            uid1=uid1,
            enum_number=int(match.group(1)) if match else None,
            name=map_name,
        )

        def_uid = RelationDef.LIST_TO_LIST.value
        rel = self.map_store.find_relation(uid1, def_uid)
        if rel is None:
            self.logger.warning(f"Relation missing: UID1={uid1}, DefUID={def_uid}")
            return result

        _, uid2, _ = relation_triple(rel)
        result.relation_exists = True
        result.relation_uid2 = uid2
        self.logger.info(f"Relation exists: UID1={uid1}, UID2={uid2 or '(null)'}, DefUID={def_uid}")

        if not uid2 or not uid2.strip():
            self.logger.warning(
                f"Relation found but UID2 is empty for UID1={uid1}, DefUID={def_uid}"
            )
            return result

        target_list = self.target_store.find_by_uid(TARGET_LIST_TAG, uid2)
        if target_list is not None:
            result.target_list_exists = True
            result.target_list_name = object_name(target_list)
            self.logger.info(
                f"SPF EnumListType found: UID={uid2}, Name='{result.target_list_name or ''}'"
            )
            return result

        self.logger.warning(
            f"SPF EnumListType NOT FOUND for UID={uid2} (from ToolMap relation UID1={uid1})"
        )
        self.target_store.insert(
            build_target_list(uid2, map_name or '', result.enum_number),
            TARGET_LIST_PLACEMENT,
        )
        result.target_list_exists = True
        result.target_list_created = True
        result.target_list_name = map_name or ''

        number_note = (
            f", EnumNumber={result.enum_number}" if result.enum_number is not None else ''
        )
        log_success(
            self.logger,
            f"Created SPF EnumListType: UID={uid2}, Name='{result.target_list_name}'{number_note}"
        )
        return result


__all__ = ['EnumListScanner']
