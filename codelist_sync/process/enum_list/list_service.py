# Path: codelist_sync/process/enum_list/list_service.py
"""
EnumList Existence and Creation (Map store)

Ensures one SPMapEnumListDef per code list. Existing definitions are
never renamed; a differing name is reported as NAME_MISMATCH.
"""

from typing import Optional

from ...constants import MAP_LIST_TAG, ListDefStatus
from ...core.logger.ipo_logging import get_process_logger, log_success
from ..models.codelist import CodeList
from ..models.outcomes import EnumListCheckResult
from ..store.document_store import DocumentStore
from ..store.elements import build_map_list, object_name
from ..store.placement import MAP_LIST_PLACEMENT


class EnumListService:
    """
    Ensures Map list definitions exist.

    Args:
        map_store: ToolMap document store
        scope_element: Tag of the element list definitions live under
            (empty or None means the document root; falls back to the
            root when the element is not found)

    Example:
        service = EnumListService(map_store)
        result = service.ensure_enum_list_def(code_list)
        if result.status == ListDefStatus.CREATED:
            ...
    """

    def __init__(self, map_store: DocumentStore, scope_element: Optional[str] = None):
        self.map_store = map_store
        self.scope_element = scope_element
        self.logger = get_process_logger('enum_list.service')

    def ensure_enum_list_def(self, code_list: CodeList) -> EnumListCheckResult:
        """
        Ensure the SPMapEnumListDef for a code list exists.

        Args:
            code_list: Parsed code list

        Returns:
            EnumListCheckResult with CREATED, EXISTS or NAME_MISMATCH
        """
        uid = code_list.list_uid
        parsed_name = code_list.name or ''
        scope = self.map_store.find_scope(self.scope_element)

        existing = self.map_store.find_by_uid(MAP_LIST_TAG, uid, scope=scope)
        if existing is not None:
            existing_name = object_name(existing)

            if parsed_name and existing_name != parsed_name:
                self.logger.warning(
                    f"ToolMap EnumList exists but Name differs for UID={uid}. "
                    f"Existing='{existing_name if existing_name is not None else '(null)'}', "
                    f"Parsed='{parsed_name}'"
                )
                status = ListDefStatus.NAME_MISMATCH
            else:
                self.logger.info(f"ToolMap EnumList already present for UID={uid}")
                status = ListDefStatus.EXISTS

            return EnumListCheckResult(
                uid=uid,
                status=status,
                parsed_name=code_list.name,
                existing_name=existing_name,
            )

        self.map_store.insert(
            build_map_list(uid, parsed_name),
            MAP_LIST_PLACEMENT,
            parent=scope,
        )
        log_success(self.logger, f"Created ToolMap EnumList: UID={uid}, Name='{parsed_name}'")

        return EnumListCheckResult(
            uid=uid,
            status=ListDefStatus.CREATED,
            parsed_name=code_list.name,
        )


__all__ = ['EnumListService']
