# Path: codelist_sync/tests/unit/test_enum_list_scanner.py
"""
Unit Tests for EnumListScanner (list-to-list relations and Target lists).
"""

import pytest

from codelist_sync.constants import TARGET_LIST_TAG
from codelist_sync.loaders.xml_loader import load_document_string
from codelist_sync.process.errors import DocumentStructureError
from codelist_sync.process.store.elements import object_name


class TestScan:
    """Scanning Map list definitions."""

    def _scan(self, map_store, target_store):
        from codelist_sync.process.enum_list.list_scanner import EnumListScanner
        return EnumListScanner(map_store, target_store).scan()

    def test_existing_target_list(self, map_store, target_store):
        results = self._scan(map_store, target_store)
        by_uid = {r.uid1: r for r in results}

        first = by_uid['PDS3DEnumList_10']
        assert first.enum_number == 10
        assert first.relation_exists
        assert first.relation_uid2 == 'TL-10'
        assert first.target_list_exists
        assert not first.target_list_created
        assert first.target_list_name == 'Fluid Code'

    def test_creates_missing_target_list_with_relation_uid(self, map_store, target_store):
        results = self._scan(map_store, target_store)
        second = [r for r in results if r.uid1 == 'PDS3DEnumList_20'][0]

        assert second.target_list_created
        node = target_store.find_by_uid(TARGET_LIST_TAG, 'TL-20')
        assert object_name(node) == 'Insulation Type'
        assert node.find('IEnumEnum').get('EnumNumber') == '20'

    def test_second_scan_creates_nothing(self, map_store, target_store):
        self._scan(map_store, target_store)
        mutations = target_store.mutation_count

        results = self._scan(map_store, target_store)

        assert target_store.mutation_count == mutations
        assert not any(r.target_list_created for r in results)

    def test_missing_relation_is_reported_only(self, empty_target_store):
        store = load_document_string(
            '<ToolMapSchema><SPMapEnumListDef><IObject UID="PDS3DEnumList_5" Name="X"/>'
            '</SPMapEnumListDef></ToolMapSchema>',
            'ToolMap',
        )

        results = self._scan(store, empty_target_store)

        assert len(results) == 1
        assert not results[0].relation_exists
        assert not store.modified
        assert not empty_target_store.modified

    def test_skips_nodes_without_uid(self, empty_target_store):
        store = load_document_string(
            '<ToolMapSchema><SPMapEnumListDef/>'
            '<SPMapEnumListDef><IObject UID=" "/></SPMapEnumListDef></ToolMapSchema>',
            'ToolMap',
        )

        assert self._scan(store, empty_target_store) == []

    def test_unparseable_uid_keeps_scanning(self, empty_target_store):
        store = load_document_string(
            '<ToolMapSchema>'
            '<SPMapEnumListDef><IObject UID="CustomList" Name="Custom"/></SPMapEnumListDef>'
            '<Rel><IObject UID="R1"/>'
            '<IRel UID1="CustomList" UID2="TL-C" DefUID="MapEnumListToEnumList"/></Rel>'
            '</ToolMapSchema>',
            'ToolMap',
        )

        results = self._scan(store, empty_target_store)

        assert results[0].enum_number is None
        assert results[0].target_list_created
        node = empty_target_store.find_by_uid(TARGET_LIST_TAG, 'TL-C')
        assert node.find('IEnumEnum') is None

    def test_blank_uid2_creates_nothing(self, empty_target_store):
        store = load_document_string(
            '<ToolMapSchema>'
            '<SPMapEnumListDef><IObject UID="PDS3DEnumList_5" Name="X"/></SPMapEnumListDef>'
            '<Rel><IObject UID="R1"/>'
            '<IRel UID1="PDS3DEnumList_5" UID2="" DefUID="MapEnumListToEnumList"/></Rel>'
            '</ToolMapSchema>',
            'ToolMap',
        )

        results = self._scan(store, empty_target_store)

        assert results[0].relation_exists
        assert not results[0].target_list_exists
        assert not empty_target_store.modified

    def test_failing_list_is_recorded_and_scan_continues(
        self, map_store, target_store, monkeypatch
    ):
        from codelist_sync.process.enum_list.list_scanner import EnumListScanner

        find_by_uid = target_store.find_by_uid

        def broken_lookup(tag, uid, *args, **kwargs):
            if uid == 'TL-10':
                raise KeyError('index out of date')
            return find_by_uid(tag, uid, *args, **kwargs)

        monkeypatch.setattr(target_store, 'find_by_uid', broken_lookup)
        failures = []

        results = EnumListScanner(map_store, target_store).scan(failures)

        assert [r.uid1 for r in results] == ['PDS3DEnumList_20']
        assert results[0].target_list_created
        assert len(failures) == 1
        assert failures[0].item == 'PDS3DEnumList_10 (scan)'
        assert 'index out of date' in failures[0].reason

    def test_structure_error_is_not_isolated(self, map_store, target_store, monkeypatch):
        from codelist_sync.process.enum_list.list_scanner import EnumListScanner

        def no_root(*args, **kwargs):
            raise DocumentStructureError('SPF')

        monkeypatch.setattr(target_store, 'find_by_uid', no_root)

        with pytest.raises(DocumentStructureError):
            EnumListScanner(map_store, target_store).scan([])
