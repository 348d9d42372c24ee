# Path: codelist_sync/process/coordinator.py
"""
Reconciliation Coordinator

The main orchestrator of one reconciliation pass over a Map store and
a Target store. This is the primary entry point of the engine.

Pass order:
1. Ensure a Map list definition per code list
2. Scan Map list definitions against the Target store
3. Reconcile the values of every code list

A code list whose reconciliation raises is logged and recorded as a
failure; the pass continues with the next one. A store without a
root element aborts the pass.
"""

from datetime import datetime
from typing import Iterable, Optional

from ..constants import DEFAULT_TIE_BREAK_POLICY, TieBreakPolicy
from ..core.logger.ipo_logging import get_process_logger, log_success
from .enum_list import EnumListScanner, EnumListService
from .enum_value import EnumValueService
from .errors import DocumentStructureError
from .models.codelist import CodeList
from .models.hierarchy import MultiLevelHierarchy
from .models.outcomes import ItemFailure, ReconciliationResult
from .store.document_store import DocumentStore
from .store.uid_generator import UidGenerator


class ReconciliationCoordinator:
    """
    Runs list checks, the relation scan and value reconciliation.

    Example:
        coordinator = ReconciliationCoordinator(map_store, target_store)
        result = coordinator.run(
            code_lists,
            enum_to_sheet={35: 'Status'},
            hierarchies=hierarchies,
        )
        print(result.summary())
    """

    def __init__(
        self,
        map_store: DocumentStore,
        target_store: DocumentStore,
        uid_generator: Optional[UidGenerator] = None,
        policy: TieBreakPolicy = DEFAULT_TIE_BREAK_POLICY,
        scope_element: Optional[str] = None
    ):
        """
        Initialize coordinator.

        Args:
            map_store: ToolMap document store
            target_store: SPF document store
            uid_generator: Source of opaque Target UIDs (UUID4 by default)
            policy: Tie-break policy for ambiguous name matches
            scope_element: Tag Map list definitions live under (root when empty)
        """
        self.map_store = map_store
        self.target_store = target_store
        self.logger = get_process_logger('coordinator')

        uid_generator = uid_generator or UidGenerator()
        self.list_service = EnumListService(map_store, scope_element)
        self.list_scanner = EnumListScanner(map_store, target_store)
        self.value_service = EnumValueService(map_store, target_store, uid_generator, policy)
        self.policy = policy

    def run(
        self,
        code_lists: Iterable[CodeList],
        enum_to_sheet: Optional[dict[int, str]] = None,
        hierarchies: Optional[dict[str, MultiLevelHierarchy]] = None
    ) -> ReconciliationResult:
        """
        Run one reconciliation pass.

        Args:
            code_lists: Parsed code lists
            enum_to_sheet: Enum number -> grouping (sheet) name
            hierarchies: Grouping name -> hierarchy

        Returns:
            ReconciliationResult with every decision taken

        Raises:
            DocumentStructureError: If either store has no root element
        """
        self.map_store.require_root()
        self.target_store.require_root()

        code_lists = list(code_lists)
        result = ReconciliationResult()
        self.logger.info(
            f"Reconciling {len(code_lists)} code list(s) "
            f"(tie-break={self.policy.value}, "
            f"hierarchies={len(hierarchies) if hierarchies else 0})"
        )

        # Phase 1: Map list definitions
        for code_list in code_lists:
            try:
                result.list_checks.append(self.list_service.ensure_enum_list_def(code_list))
            except DocumentStructureError:
                raise
            except Exception as e:
                self._record_failure(result, code_list, 'list definition', e)

        # Phase 2: list-to-list relations and Target lists
        result.scan_results = self.list_scanner.scan(result.failures)

        # Phase 3: values, cross links, containment
        for code_list in code_lists:
            try:
                result.outcomes.extend(
                    self.value_service.reconcile(code_list, enum_to_sheet, hierarchies)
                )
            except DocumentStructureError:
                raise
            except Exception as e:
                self._record_failure(result, code_list, 'values', e)

        result.finished_at = datetime.now()
        summary = result.summary()
        log_success(
            self.logger,
            f"Reconciliation complete: {summary['code_lists']} list(s), "
            f"{summary['entries']} entries, {summary['entries_changed']} changed, "
            f"{summary['failures']} failure(s)"
        )
        return result

    def _record_failure(
        self,
        result: ReconciliationResult,
        code_list: CodeList,
        phase: str,
        error: Exception
    ) -> None:
        item = f"{code_list.list_uid} ({phase})"
        self.logger.error(f"Failed to reconcile {item}: {error}", exc_info=True)
        result.failures.append(ItemFailure(item=item, reason=str(error)))


__all__ = ['ReconciliationCoordinator']
