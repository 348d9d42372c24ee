# Path: codelist_sync/config_loader.py
"""
Configuration Loader for codelist_sync

All settings come from CODELIST_SYNC_* environment variables, optionally
seeded from a .env file. One ConfigLoader instance is shared by the
whole process, so CLI overrides made in main() are seen everywhere.

Lookup order for the .env file:
1. Current working directory
2. Directory containing this module
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .constants import DEFAULT_TIE_BREAK_POLICY


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Input Defaults
DEFAULT_CODELIST_PATTERN: str = '*.edt'

# Output Defaults
DEFAULT_VERSION_PATTERN: str = '_{:03d}'
DEFAULT_REPORT_FORMATS: str = 'json,text'

# XML Parsing Defaults
DEFAULT_ENCODING: str = 'utf-8'


class ConfigLoader:
    """
    Typed view of the CODELIST_SYNC_* settings.

    Paths come back as Path objects, flags as bool, report formats as
    a lower-case list. A missing required path raises ValueError
    when the instance is first created.

    Example:
        config = ConfigLoader()
        map_path = config.get('map_schema_path')  # Returns Path object
        policy = config.get('tie_break_policy')   # Returns str
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Return the shared instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Read the .env file and the environment once per process.

        Raises:
            ValueError: If a required path is not configured
        """
        if ConfigLoader._initialized:
            return

        for env_path in (Path.cwd() / '.env', Path(__file__).resolve().parent / '.env'):
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)
                break

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Build the settings dictionary from the environment.

        Raises:
            ValueError: If a required path is not configured
        """
        config = {
            # ================================================================
            # RUN ENVIRONMENT
            # ================================================================
            'environment': self._get_env('CODELIST_SYNC_ENVIRONMENT', 'development'),
            'debug': self._get_bool('CODELIST_SYNC_DEBUG', False),

            # ================================================================
            # INPUT DOCUMENTS (READ-ONLY, never overwritten)
            # ================================================================
            'map_schema_path': self._get_path(
                'CODELIST_SYNC_MAP_SCHEMA_PATH', required=True
            ),
            'target_schema_path': self._get_path(
                'CODELIST_SYNC_TARGET_SCHEMA_PATH', required=True
            ),
            'map_list_scope_element': self._get_env(
                'CODELIST_SYNC_MAP_LIST_SCOPE_ELEMENT', ''
            ),
            'disable_external_entities': self._get_bool(
                'CODELIST_SYNC_DISABLE_EXTERNAL_ENTITIES', True
            ),
            'default_encoding': self._get_env(
                'CODELIST_SYNC_DEFAULT_ENCODING', DEFAULT_ENCODING
            ),

            # ================================================================
            # CODE LIST SOURCES
            # ================================================================
            'codelist_dir': self._get_path('CODELIST_SYNC_CODELIST_DIR', required=True),
            'codelist_pattern': self._get_env(
                'CODELIST_SYNC_CODELIST_PATTERN', DEFAULT_CODELIST_PATTERN
            ),
            'codelist_recursive': self._get_bool('CODELIST_SYNC_CODELIST_RECURSIVE', True),

            # ================================================================
            # HIERARCHY SOURCES (OPTIONAL)
            # ================================================================
            'enum_sheet_map_path': self._get_path('CODELIST_SYNC_ENUM_SHEET_MAP_PATH'),
            'sheet_list_path': self._get_path('CODELIST_SYNC_SHEET_LIST_PATH'),
            'hierarchy_workbook_path': self._get_path(
                'CODELIST_SYNC_HIERARCHY_WORKBOOK_PATH'
            ),

            # ================================================================
            # MATCHING POLICY
            # ================================================================
            'tie_break_policy': self._get_env(
                'CODELIST_SYNC_TIE_BREAK_POLICY', DEFAULT_TIE_BREAK_POLICY.value
            ),

            # ================================================================
            # VERSIONED DOCUMENTS AND REPORTS
            # ================================================================
            'output_dir': self._get_path('CODELIST_SYNC_OUTPUT_DIR'),
            'version_pattern': self._get_env(
                'CODELIST_SYNC_VERSION_PATTERN', DEFAULT_VERSION_PATTERN
            ),
            'reports_dir': self._get_path('CODELIST_SYNC_REPORTS_DIR'),
            'report_formats': self._get_list(
                'CODELIST_SYNC_REPORT_FORMATS', DEFAULT_REPORT_FORMATS
            ),

            # ================================================================
            # AUDIT DATABASE (OPTIONAL)
            # ================================================================
            'audit_database_url': self._get_env('CODELIST_SYNC_AUDIT_DATABASE_URL', ''),

            # ================================================================
            # IPO LOG FILES
            # ================================================================
            'log_dir': self._get_path('CODELIST_SYNC_LOG_DIR', required=True),
            'log_level': self._get_env('CODELIST_SYNC_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('CODELIST_SYNC_LOG_CONSOLE', True),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Setting by key (e.g., 'codelist_dir'), or default when unset."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Override a configuration value for this process (CLI flags)."""
        self._config[key] = value

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Path setting; ${VAR} references are expanded.

        Returns:
            Path, or None when unset or empty and not required

        Raises:
            ValueError: If required and unset
        """
        value = os.getenv(key)

        if not value:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """String setting."""
        return os.getenv(key, default)

    def _get_bool(self, key: str, default: bool) -> bool:
        """Flag setting: true, 1, yes or on (any case) mean True."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def _get_list(self, key: str, default: str) -> list[str]:
        """Comma separated setting, lower-cased, empty items dropped."""
        value = os.getenv(key, default)
        return [item.strip().lower() for item in value.split(',') if item.strip()]

    def __repr__(self) -> str:
        return (
            f"ConfigLoader("
            f"map={self._config.get('map_schema_path')}, "
            f"target={self._config.get('target_schema_path')}, "
            f"environment={self._config.get('environment')})"
        )


__all__ = ['ConfigLoader']
