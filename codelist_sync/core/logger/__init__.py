# Path: codelist_sync/core/logger/__init__.py
"""
codelist_sync Logger Package

IPO-aware logging for schema reconciliation.

Provides separate log streams for:
- INPUT layer (loaders)
- PROCESS layer (reconciliation engine)
- OUTPUT layer (saves, reports, audit)
"""

from .ipo_logging import (
    SUCCESS_LEVEL,
    setup_ipo_logging,
    log_success,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'SUCCESS_LEVEL',
    'setup_ipo_logging',
    'log_success',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
