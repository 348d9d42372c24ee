# Path: codelist_sync/core/logger/ipo_logging.py
"""
IPO-Aware Logging for codelist_sync

Every logger name starts with its layer, so one run can be read back
per layer:

    input.*    documents, code list files, sheet map, workbook
    process.*  list checks, relation scan, value reconciliation
    output.*   versioned saves, reports, audit records

Files written to the log directory:

    full_activity.log     every record
    input_activity.log    input.* only
    process_activity.log  process.* only
    output_activity.log   output.* only

SUCCESS (25) sits between INFO and WARNING and marks the decisions
that changed a document.
"""

import logging
import sys
from pathlib import Path


SUCCESS_LEVEL: int = 25
logging.addLevelName(SUCCESS_LEVEL, 'SUCCESS')

LAYERS = ('input', 'process', 'output')

FILE_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LayerFilter(logging.Filter):
    """Passes records whose logger belongs to one layer."""

    def __init__(self, layer: str):
        super().__init__()
        self.prefix = f'{layer}.'

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith(self.prefix)


def _file_handler(path: Path, formatter: logging.Formatter) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_ipo_logging(
    log_dir: Path,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Route all logging of a run to the layer files and, optionally, stdout.

    Replaces any handler already installed on the root logger.

    Args:
        log_dir: Directory for the log files (created when missing)
        log_level: Root level name; unknown names fall back to INFO
        console_output: Also echo records at log_level to stdout

    Example:
        setup_ipo_logging(Path('/var/log/codelist_sync'), 'DEBUG', console_output=False)
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    file_formatter = logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
    root.addHandler(_file_handler(log_dir / 'full_activity.log', file_formatter))

    for layer in LAYERS:
        handler = _file_handler(log_dir / f'{layer}_activity.log', file_formatter)
        handler.addFilter(LayerFilter(layer))
        root.addHandler(handler)

    if console_output:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console)


def log_success(logger: logging.Logger, message: str, *args) -> None:
    """Log at SUCCESS level (a document was changed)."""
    logger.log(SUCCESS_LEVEL, message, *args)


def get_input_logger(name: str) -> logging.Logger:
    """Logger for readers of documents, code lists and hierarchy data."""
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """Logger for the reconciliation engine (e.g., 'enum_value.service')."""
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """Logger for document saves, reports and audit records."""
    return logging.getLogger(f'output.{name}')


__all__ = [
    'SUCCESS_LEVEL',
    'LayerFilter',
    'setup_ipo_logging',
    'log_success',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
