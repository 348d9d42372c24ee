# Path: codelist_sync/process/hierarchy/__init__.py
"""
Hierarchy Package

Name normalization and parent lookup in grouping hierarchies.
"""

from .lookup import normalize_name, eq_name, find_parents, find_immediate_parent

__all__ = [
    'normalize_name',
    'eq_name',
    'find_parents',
    'find_immediate_parent',
]
