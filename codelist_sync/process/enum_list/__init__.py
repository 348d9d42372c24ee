# Path: codelist_sync/process/enum_list/__init__.py
"""
EnumList Package

List-level reconciliation: Map list definitions and their links to
Target lists.
"""

from .list_service import EnumListService
from .list_scanner import EnumListScanner

__all__ = ['EnumListService', 'EnumListScanner']
