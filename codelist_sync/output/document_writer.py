# Path: codelist_sync/output/document_writer.py
"""
Document Writer

Persists a DocumentStore with an XML declaration in UTF-8. The tree
is written as loaded: original whitespace and comments are kept and
new nodes carry the indentation given to them on insert.
"""

from pathlib import Path
from typing import Optional

from lxml import etree

from ..config_loader import DEFAULT_VERSION_PATTERN
from ..core.logger.ipo_logging import get_output_logger, log_success
from ..process.store.document_store import DocumentStore
from .versioned_path import next_version_path


logger = get_output_logger('document_writer')


def save_document(store: DocumentStore, path: Path) -> Path:
    """
    Write a store's document to a path.

    Args:
        store: Document store to persist
        path: Destination file

    Returns:
        The written path

    Raises:
        DocumentStructureError: If the store has no root
        OSError: If the file cannot be written
    """
    path = Path(path)
    store.require_root()
    path.parent.mkdir(parents=True, exist_ok=True)

    store.tree.write(
        str(path),
        xml_declaration=True,
        encoding='utf-8',
        pretty_print=False,
    )
    log_success(logger, f"Saved {store.label} document: {path}")
    return path


def save_as_next_version(
    store: DocumentStore,
    pattern: str = DEFAULT_VERSION_PATTERN,
    output_dir: Optional[Path] = None
) -> Path:
    """
    Save a store to the next free versioned path of its source file.

    Args:
        store: Document store loaded from a file
        pattern: Version suffix pattern
        output_dir: Directory for the new file (defaults to the source directory)

    Returns:
        The written path

    Raises:
        ValueError: If the store has no source path
    """
    if store.source_path is None:
        raise ValueError(f"{store.label} document has no source path to version")

    target = next_version_path(store.source_path, pattern, output_dir)
    return save_document(store, target)


def to_string(store: DocumentStore) -> str:
    """Serialize a store's document to text (used for previews and tests)."""
    return etree.tostring(store.root, encoding='unicode')


__all__ = ['save_document', 'save_as_next_version', 'to_string']
