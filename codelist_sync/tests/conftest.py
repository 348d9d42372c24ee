# Path: codelist_sync/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for codelist_sync

Provides common test fixtures used across all test modules.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from codelist_sync.loaders.xml_loader import load_document_string
from codelist_sync.process.models.codelist import CodeEntry, CodeList
from codelist_sync.process.models.hierarchy import MultiLevelHierarchy
from codelist_sync.process.store.uid_generator import SequentialUidGenerator


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'CODELIST_SYNC_ENVIRONMENT': 'test',
        'CODELIST_SYNC_DEBUG': 'true',

        # Input documents - REQUIRED
        'CODELIST_SYNC_MAP_SCHEMA_PATH': '/tmp/codelist_sync_test/ToolMap.xml',
        'CODELIST_SYNC_TARGET_SCHEMA_PATH': '/tmp/codelist_sync_test/SPF.xml',
        'CODELIST_SYNC_CODELIST_DIR': '/tmp/codelist_sync_test/codelists',

        # Output
        'CODELIST_SYNC_REPORTS_DIR': '/tmp/codelist_sync_test/reports',
        'CODELIST_SYNC_LOG_DIR': '/tmp/codelist_sync_test/logs',

        # Policy
        'CODELIST_SYNC_TIE_BREAK_POLICY': 'first_found',
        'CODELIST_SYNC_REPORT_FORMATS': 'json, CSV',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reset_singletons():
    """Reset the ConfigLoader singleton before and after a test."""
    from codelist_sync.config_loader import ConfigLoader

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
    yield
    ConfigLoader._instance = None
    ConfigLoader._initialized = False


# ==============================================================================
# SAMPLE DOCUMENTS
# ==============================================================================

EMPTY_MAP_XML = """<?xml version="1.0" encoding="utf-8"?>
<ToolMapSchema>
</ToolMapSchema>
"""

EMPTY_TARGET_XML = """<?xml version="1.0" encoding="utf-8"?>
<SPFSchema>
</SPFSchema>
"""

MAP_XML = """<?xml version="1.0" encoding="utf-8"?>
<ToolMapSchema>
  <SPMapEnumListDef>
    <IObject UID="PDS3DEnumList_10" Name="Fluid Code"/>
    <IMapObject/>
    <IMapEnumListDef ProcessEnumListCriteria=""/>
  </SPMapEnumListDef>
  <SPMapEnumListDef>
    <IObject UID="PDS3DEnumList_20" Name="Insulation Type"/>
    <IMapObject/>
    <IMapEnumListDef ProcessEnumListCriteria=""/>
  </SPMapEnumListDef>
  <Rel>
    <IObject UID="R-LIST-10"/>
    <IRel UID1="PDS3DEnumList_10" UID2="TL-10" DefUID="MapEnumListToEnumList"/>
  </Rel>
  <Rel>
    <IObject UID="R-LIST-20"/>
    <IRel UID1="PDS3DEnumList_20" UID2="TL-20" DefUID="MapEnumListToEnumList"/>
  </Rel>
</ToolMapSchema>
"""

# Two EnumEnum named HX: T-HX-B sits under FluidSystems and comes first
# in document order, T-HX-A sits under Fittings and has the lower UID.
TARGET_XML = """<?xml version="1.0" encoding="utf-8"?>
<SPFSchema>
  <EnumListType>
    <IObject UID="TL-10" Name="Fluid Code"/>
    <ISchemaObj/>
    <IPropertyType/>
  </EnumListType>
  <EnumListType>
    <IObject UID="TL-FS" Name="FluidSystems"/>
    <ISchemaObj/>
    <IPropertyType/>
  </EnumListType>
  <EnumListType>
    <IObject UID="TL-FIT" Name="Fittings"/>
    <ISchemaObj/>
    <IPropertyType/>
  </EnumListType>
  <EnumEnum>
    <IObject UID="T-HX-B" Name="HX"/>
    <ISchemaObj/>
    <IEnumEnum EnumNumber="1"/>
  </EnumEnum>
  <EnumEnum>
    <IObject UID="T-HX-A" Name="hx"/>
    <ISchemaObj/>
    <IEnumEnum EnumNumber="7"/>
  </EnumEnum>
  <EnumEnum>
    <IObject UID="T-WATER" Name="Water"/>
    <ISchemaObj/>
    <IEnumEnum EnumNumber="2"/>
  </EnumEnum>
  <Rel>
    <IObject UID="R-C-1"/>
    <IRel UID1="TL-FS" UID2="T-HX-B" DefUID="Contains"/>
  </Rel>
  <Rel>
    <IObject UID="R-C-2"/>
    <IRel UID1="TL-FIT" UID2="T-HX-A" DefUID="Contains"/>
  </Rel>
</SPFSchema>
"""


@pytest.fixture
def empty_map_store():
    """Map store with only a root element."""
    return load_document_string(EMPTY_MAP_XML, 'ToolMap')


@pytest.fixture
def empty_target_store():
    """Target store with only a root element."""
    return load_document_string(EMPTY_TARGET_XML, 'SPF')


@pytest.fixture
def map_store():
    """Map store with two list definitions and their list relations."""
    return load_document_string(MAP_XML, 'ToolMap')


@pytest.fixture
def target_store():
    """Target store with lists, duplicate HX values and containment."""
    return load_document_string(TARGET_XML, 'SPF')


@pytest.fixture
def uid_generator():
    """Predictable UIDs: GEN-0001, GEN-0002, ..."""
    return SequentialUidGenerator()


# ==============================================================================
# SAMPLE CODE LISTS AND HIERARCHIES
# ==============================================================================

@pytest.fixture
def approval_status():
    """Enum 35 with a blank placeholder and two labelled values."""
    code_list = CodeList(enum_number=35, name='Approval Status')
    code_list.add_entry(CodeEntry(number=1, short=''))
    code_list.add_entry(CodeEntry(number=2, short='A', long='Approved'))
    code_list.add_entry(CodeEntry(number=3, short='NA', long='Not approved'))
    return code_list


@pytest.fixture
def fluid_code():
    """Enum 10 with an ambiguous HX value and an unambiguous Water value."""
    code_list = CodeList(enum_number=10, name='Fluid Code')
    code_list.add_entry(CodeEntry(number=1, short='HX', long='Heat exchanger'))
    code_list.add_entry(CodeEntry(number=2, short='Water'))
    return code_list


@pytest.fixture
def fluid_hierarchy():
    """Two-level hierarchy: FluidSystems -> HX, Utilities -> Water."""
    hierarchy = MultiLevelHierarchy(level_count=2)
    hierarchy.add_edge(0, 'fluidsystems', 'hx', parent_label='FluidSystems', child_label='HX')
    hierarchy.add_edge(0, 'utilities', 'water', parent_label='Utilities', child_label='Water')
    return hierarchy


@pytest.fixture
def sample_edt_text():
    """Content of code0035.edt."""
    return (
        "; Code list export\n"
        "; 0035, Approval Status (10)\n"
        "        1 = ' '\n"
        "        2 = 'A =Approved'\n"
        "        3 = 'NA=Not approved'\n"
    )
