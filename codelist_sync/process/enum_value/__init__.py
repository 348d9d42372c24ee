# Path: codelist_sync/process/enum_value/__init__.py
"""
EnumValue Package

Value-level reconciliation between the Map and Target stores.
"""

from .candidate_resolver import CandidateResolution, CandidateResolver, apply_tie_break
from .value_service import EnumValueService

__all__ = [
    'CandidateResolution',
    'CandidateResolver',
    'apply_tie_break',
    'EnumValueService',
]
