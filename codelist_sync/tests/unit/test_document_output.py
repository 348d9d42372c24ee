# Path: codelist_sync/tests/unit/test_document_output.py
"""
Unit Tests for document loading, versioned paths and saving.
"""

import pytest
from lxml import etree

from codelist_sync.constants import TARGET_VALUE_TAG
from codelist_sync.loaders.xml_loader import load_document, load_document_string
from codelist_sync.output.document_writer import save_as_next_version, save_document, to_string
from codelist_sync.output.versioned_path import next_version_path
from codelist_sync.process.errors import DocumentLoadError
from codelist_sync.process.store.elements import build_target_value
from codelist_sync.process.store.placement import TARGET_VALUE_PLACEMENT


SPF_TEXT = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<!-- exported -->\n'
    '<SPFSchema>\n'
    '  <EnumEnum>\n'
    '    <IObject UID="T-1" Name="A"/>\n'
    '  </EnumEnum>\n'
    '</SPFSchema>\n'
)


class TestNextVersionPath:
    """Never overwrite: next free versioned name."""

    def test_first_version(self, temp_dir):
        source = temp_dir / 'toolmapschema.xml'

        assert next_version_path(source) == temp_dir / 'toolmapschema_001.xml'

    def test_skips_existing_versions(self, temp_dir):
        (temp_dir / 'schema_001.xml').write_text('x')
        (temp_dir / 'schema_002.xml').write_text('x')

        assert next_version_path(temp_dir / 'schema.xml') == temp_dir / 'schema_003.xml'

    def test_versioned_source_continues_numbering(self, temp_dir):
        source = temp_dir / 'schema_007.xml'

        assert next_version_path(source) == temp_dir / 'schema_008.xml'

    def test_output_dir_and_pattern(self, temp_dir):
        out = temp_dir / 'out'

        path = next_version_path(temp_dir / 'schema.xml', pattern='-v{}', output_dir=out)

        assert path == out / 'schema-v1.xml'


class TestXmlLoader:
    """Hardened, non-recovering parser."""

    def test_load_document(self, temp_dir):
        path = temp_dir / 'SPF.xml'
        path.write_text(SPF_TEXT, encoding='utf-8')

        store = load_document(path, 'SPF')

        assert store.source_path == path
        assert store.find_by_uid(TARGET_VALUE_TAG, 'T-1') is not None

    def test_missing_file(self, temp_dir):
        with pytest.raises(DocumentLoadError):
            load_document(temp_dir / 'none.xml', 'SPF')

    def test_malformed_document_is_fatal(self, temp_dir):
        path = temp_dir / 'SPF.xml'
        path.write_text('<SPFSchema><EnumEnum></SPFSchema>', encoding='utf-8')

        with pytest.raises(DocumentLoadError):
            load_document(path, 'SPF')

    def test_entities_are_not_expanded(self):
        text = (
            '<!DOCTYPE r [<!ENTITY secret SYSTEM "file:///etc/hostname">]>'
            '<r>&secret;</r>'
        )

        store = load_document_string(text, 'SPF')

        assert 'secret' in to_string(store)


class TestSaveDocument:
    """Saving preserves content and layout apart from added nodes."""

    def test_round_trip_unchanged(self, temp_dir):
        source = temp_dir / 'SPF.xml'
        source.write_text(SPF_TEXT, encoding='utf-8')
        store = load_document(source, 'SPF')

        written = save_as_next_version(store)

        assert written == temp_dir / 'SPF_001.xml'
        assert source.read_text(encoding='utf-8') == SPF_TEXT
        saved = etree.parse(str(written))
        assert saved.getroot().tag == 'SPFSchema'
        assert '<!-- exported -->' in written.read_text(encoding='utf-8')

    def test_inserted_node_is_saved(self, temp_dir):
        source = temp_dir / 'SPF.xml'
        source.write_text(SPF_TEXT, encoding='utf-8')
        store = load_document(source, 'SPF')
        store.insert(build_target_value('T-2', 'B', 2), TARGET_VALUE_PLACEMENT)

        written = save_document(store, temp_dir / 'nested' / 'out.xml')

        reloaded = load_document(written, 'SPF')
        assert reloaded.find_by_uid(TARGET_VALUE_TAG, 'T-2') is not None

    def test_store_without_source_cannot_be_versioned(self):
        store = load_document_string('<SPFSchema/>', 'SPF')

        with pytest.raises(ValueError):
            save_as_next_version(store)
