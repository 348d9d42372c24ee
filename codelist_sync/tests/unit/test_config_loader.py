# Path: codelist_sync/tests/unit/test_config_loader.py
"""
Unit Tests for ConfigLoader

Tests the configuration loading functionality including:
- Environment variable parsing
- Type conversion methods
- Singleton pattern
- Default value handling
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest


class TestConfigLoaderBasics:
    """Test basic ConfigLoader functionality."""

    def test_singleton_pattern(self, mock_env_vars, reset_singletons):
        """ConfigLoader should return same instance."""
        from codelist_sync.config_loader import ConfigLoader

        assert ConfigLoader() is ConfigLoader()

    def test_get_returns_value(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        assert ConfigLoader().get('environment') == 'test'

    def test_get_returns_default_for_missing(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        assert ConfigLoader().get('nonexistent_key', 'default_value') == 'default_value'

    def test_set_overrides_value(self, mock_env_vars, reset_singletons):
        """set() should override a value for the process."""
        from codelist_sync.config_loader import ConfigLoader

        config = ConfigLoader()
        config.set('tie_break_policy', 'lowest_uid')

        assert ConfigLoader().get('tie_break_policy') == 'lowest_uid'


class TestConfigLoaderTypeConversion:
    """Test type conversion methods."""

    def test_paths_are_path_objects(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        config = ConfigLoader()

        assert isinstance(config.get('map_schema_path'), Path)
        assert isinstance(config.get('log_dir'), Path)

    def test_bool_conversion(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        assert ConfigLoader().get('debug') is True

    def test_list_conversion(self, mock_env_vars, reset_singletons):
        """Report formats are split, trimmed and lower-cased."""
        from codelist_sync.config_loader import ConfigLoader

        assert ConfigLoader().get('report_formats') == ['json', 'csv']

    def test_optional_path_is_none(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        with patch.dict(os.environ, {'CODELIST_SYNC_HIERARCHY_WORKBOOK_PATH': ''}):
            assert ConfigLoader().get('hierarchy_workbook_path') is None


class TestConfigLoaderDefaults:
    """Test default values."""

    def test_defaults(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        env = {
            'CODELIST_SYNC_TIE_BREAK_POLICY': '',
            'CODELIST_SYNC_VERSION_PATTERN': '',
        }
        with patch.dict(os.environ, env):
            for key in env:
                del os.environ[key]
            config = ConfigLoader()

        assert config.get('tie_break_policy') == 'lowest_uid'
        assert config.get('version_pattern') == '_{:03d}'
        assert config.get('codelist_pattern') == '*.edt'
        assert config.get('disable_external_entities') is True

    def test_missing_required_path_raises(self, mock_env_vars, reset_singletons):
        from codelist_sync.config_loader import ConfigLoader

        with patch.dict(os.environ, {'CODELIST_SYNC_MAP_SCHEMA_PATH': ''}):
            with pytest.raises(ValueError):
                ConfigLoader()
