# Path: codelist_sync/loaders/xml_loader.py
"""
XML Document Loader

Loads the ToolMap and SPF schema documents into DocumentStore
sessions with a hardened lxml parser:
- no entity resolution and no network access (XXE protection)
- huge_tree disabled (billion laughs protection)
- whitespace, comments and processing instructions preserved so the
  saved documents differ from the input only by the added nodes

Unlike a recovering parser, a document that is not well-formed is a
fatal error: editing a partially recovered tree would silently drop
content on save.
"""

import logging
from pathlib import Path

from lxml import etree

from ..process.errors import DocumentLoadError
from ..process.store.document_store import DocumentStore


logger = logging.getLogger('input.xml_loader')


def create_parser(disable_external_entities: bool = True) -> etree.XMLParser:
    """
    Create lxml parser with security and preservation settings.

    Args:
        disable_external_entities: Block entity resolution and network access

    Returns:
        Configured XMLParser instance
    """
    return etree.XMLParser(
        recover=False,
        remove_blank_text=False,
        resolve_entities=not disable_external_entities,
        no_network=disable_external_entities,
        huge_tree=False,
        remove_comments=False,
        remove_pis=False,
        strip_cdata=False,
    )


def load_document(
    path: Path,
    label: str,
    disable_external_entities: bool = True
) -> DocumentStore:
    """
    Load an XML schema document from disk.

    Args:
        path: Path to the XML file
        label: Store label used in logs (e.g., "ToolMap")
        disable_external_entities: Block entity resolution and network access

    Returns:
        DocumentStore over the parsed tree

    Raises:
        DocumentLoadError: If the file is missing or not well-formed XML
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentLoadError(path, "file not found")

    logger.info(f"Loading {label} document: {path}")
    try:
        tree = etree.parse(str(path), create_parser(disable_external_entities))
    except etree.XMLSyntaxError as e:
        raise DocumentLoadError(path, f"XML syntax error: {e}") from e
    except OSError as e:
        raise DocumentLoadError(path, str(e)) from e

    store = DocumentStore(tree, label=label, source_path=path)
    logger.info(f"Loaded {label} document: root <{tree.getroot().tag}>")
    return store


def load_document_string(
    xml_text: str,
    label: str,
    disable_external_entities: bool = True
) -> DocumentStore:
    """
    Load an XML schema document from a string.

    Args:
        xml_text: XML content
        label: Store label used in logs
        disable_external_entities: Block entity resolution and network access

    Returns:
        DocumentStore over the parsed tree

    Raises:
        DocumentLoadError: If the text is not well-formed XML
    """
    data = xml_text.encode('utf-8') if isinstance(xml_text, str) else xml_text
    try:
        root = etree.fromstring(data, create_parser(disable_external_entities))
    except etree.XMLSyntaxError as e:
        raise DocumentLoadError(Path('<string>'), f"XML syntax error: {e}") from e

    return DocumentStore(root.getroottree(), label=label)


__all__ = ['create_parser', 'load_document', 'load_document_string']
