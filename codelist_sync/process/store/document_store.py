# Path: codelist_sync/process/store/document_store.py
"""
Tree Document Store

Session object owning one loaded XML schema document. Engines query
and mutate documents only through this class:

- find-by-identity: element with a given tag and IObject/@UID
- find-by-name: elements with a given tag whose IObject/@Name matches
  case and whitespace insensitively
- relation queries by (UID1, DefUID), (UID1, UID2, DefUID), (UID2, DefUID)
- placement driven inserts and relation retargeting

Indices are built once, on first query, and maintained incrementally
on every insert and retarget. Existing nodes are never removed.
"""

from collections import defaultdict
from pathlib import Path
from typing import Iterator, Optional

from lxml import etree

from ...constants import RELATION_TAG, UID2_ATTR
from ...core.logger.ipo_logging import get_process_logger
from ..errors import DocumentStructureError
from ..hierarchy.lookup import normalize_name
from .elements import object_uid, object_name, relation_body, relation_triple
from .placement import AnchorKind, Placement


RelationKey = tuple[str, str]
RelationTriple = tuple[str, str, str]


class DocumentStore:
    """
    Indexed, mutable view of one XML schema document.

    Args:
        tree: Parsed lxml element tree (root may be None for an empty document)
        label: Short name used in logs and errors (e.g., "ToolMap", "SPF")
        source_path: File the document was loaded from, if any

    Raises:
        DocumentStructureError: On any query or mutation when the
            document has no root element

    Example:
        store = DocumentStore(tree, label='ToolMap')
        node = store.find_by_uid('SPMapEnumListDef', 'PDS3DEnumList_35')
        rel = store.find_relation('PDS3DEnumList_35', 'MapEnumListToEnumList')
    """

    def __init__(
        self,
        tree: Optional[etree._ElementTree],
        label: str,
        source_path: Optional[Path] = None
    ):
        self.tree = tree
        self.label = label
        self.source_path = source_path
        self.logger = get_process_logger(f'store.{label.lower()}')

        self.mutation_count = 0
        self._indexed = False
        self._identity: dict[str, dict[str, etree._Element]] = defaultdict(dict)
        self._names: dict[str, dict[str, list[etree._Element]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._rel_by_source: dict[RelationKey, list[etree._Element]] = defaultdict(list)
        self._rel_by_target: dict[RelationKey, list[etree._Element]] = defaultdict(list)
        self._rel_by_triple: dict[RelationTriple, etree._Element] = {}

    # ------------------------------------------------------------------
    # Document access
    # ------------------------------------------------------------------

    @property
    def root(self) -> etree._Element:
        """Root element of the document."""
        root = self.tree.getroot() if self.tree is not None else None
        if root is None:
            raise DocumentStructureError(self.label)
        return root

    def require_root(self) -> None:
        """Raise DocumentStructureError unless the document has a root."""
        _ = self.root

    @property
    def modified(self) -> bool:
        return self.mutation_count > 0

    def find_scope(self, tag: Optional[str]) -> etree._Element:
        """
        Resolve a search scope element.

        Args:
            tag: Tag of the scope element (empty or None means root)

        Returns:
            First descendant with that tag, or the root when absent
        """
        root = self.root
        if not tag:
            return root
        if root.tag == tag:
            return root
        scope = next(root.iter(tag), None)
        if scope is None:
            self.logger.debug(f"{self.label}: scope element <{tag}> not found, using root")
            return root
        return scope

    def iter_nodes(self, tag: str) -> Iterator[etree._Element]:
        """Iterate elements with a tag in document order."""
        return self.root.iter(tag)

    # ------------------------------------------------------------------
    # Identity and name queries
    # ------------------------------------------------------------------

    def find_by_uid(
        self,
        tag: str,
        uid: Optional[str],
        scope: Optional[etree._Element] = None
    ) -> Optional[etree._Element]:
        """
        Find the element with a tag and IObject/@UID.

        Args:
            tag: Element tag (e.g., 'EnumEnum')
            uid: UID to look up (blank never matches)
            scope: Optional ancestor the element must sit under

        Returns:
            Matching element or None
        """
        if not uid:
            return None
        self._ensure_indexed()

        node = self._identity.get(tag, {}).get(uid)
        if node is None or scope is None or scope is self.root:
            return node

        for ancestor in node.iterancestors():
            if ancestor is scope:
                return node
        return None

    def find_by_name(self, tag: str, name: Optional[str]) -> list[etree._Element]:
        """
        Find all elements with a tag whose IObject/@Name matches.

        Matching is case and whitespace insensitive. An empty name
        matches elements with an empty or missing name.

        Returns:
            Matching elements in search order (document order, then
            insertion order for nodes added during the session)
        """
        self._ensure_indexed()
        return list(self._names.get(tag, {}).get(normalize_name(name), []))

    # ------------------------------------------------------------------
    # Relation queries
    # ------------------------------------------------------------------

    def find_relations(self, uid1: str, def_uid: str) -> list[etree._Element]:
        """All Rel nodes with IRel/@UID1 and IRel/@DefUID."""
        self._ensure_indexed()
        return list(self._rel_by_source.get((uid1, def_uid), []))

    def find_relation(self, uid1: str, def_uid: str) -> Optional[etree._Element]:
        """First Rel node with IRel/@UID1 and IRel/@DefUID, or None."""
        relations = self.find_relations(uid1, def_uid)
        return relations[0] if relations else None

    def find_relations_to(self, uid2: str, def_uid: str) -> list[etree._Element]:
        """All Rel nodes with IRel/@UID2 and IRel/@DefUID."""
        self._ensure_indexed()
        return list(self._rel_by_target.get((uid2, def_uid), []))

    def get_relation(
        self,
        uid1: str,
        uid2: str,
        def_uid: str
    ) -> Optional[etree._Element]:
        """Rel node with exactly this triple, or None."""
        self._ensure_indexed()
        return self._rel_by_triple.get((uid1, uid2, def_uid))

    def has_relation(self, uid1: str, uid2: str, def_uid: str) -> bool:
        return self.get_relation(uid1, uid2, def_uid) is not None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(
        self,
        node: etree._Element,
        placement: Placement,
        parent: Optional[etree._Element] = None
    ) -> etree._Element:
        """
        Insert a new node near its kin and index it.

        Args:
            node: Detached element built by the elements module
            placement: Ordered anchors to try
            parent: Parent element (defaults to root)

        Returns:
            The inserted node
        """
        parent = self.root if parent is None else parent
        self._ensure_indexed()

        anchor_used = self._place(parent, node, placement)
        self._index_node(node)
        self.mutation_count += 1

        self.logger.debug(
            f"{self.label}: inserted <{node.tag}> uid={object_uid(node)} ({anchor_used})"
        )
        return node

    def retarget_relation(self, rel: etree._Element, new_uid2: str) -> bool:
        """
        Point an existing relation at a new UID2.

        The update is refused when a relation with the resulting
        (UID1, UID2, DefUID) triple already exists.

        Args:
            rel: Rel node owned by this store
            new_uid2: New IRel/@UID2 value

        Returns:
            True if the relation was changed, False if it already
            pointed there or the change would duplicate a triple
        """
        self._ensure_indexed()
        triple = relation_triple(rel)
        if triple is None:
            return False

        uid1, old_uid2, def_uid = triple
        if old_uid2 == new_uid2:
            return False
        if (uid1, new_uid2, def_uid) in self._rel_by_triple:
            return False

        self._unindex_relation(rel, triple)
        relation_body(rel).set(UID2_ATTR, new_uid2)
        self._index_relation(rel)
        self.mutation_count += 1

        self.logger.debug(
            f"{self.label}: relation {object_uid(rel)} retargeted {old_uid2} -> {new_uid2}"
        )
        return True

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _place(
        self,
        parent: etree._Element,
        node: etree._Element,
        placement: Placement
    ) -> str:
        """Insert node using the first anchor that resolves. Returns the anchor used."""
        for anchor in placement.anchors:
            if anchor.kind == AnchorKind.AFTER_LAST:
                sibling = next(parent.iterchildren(anchor.tag, reversed=True), None)
                if sibling is None:
                    continue
                if sibling.getnext() is None:
                    # Sibling's tail holds the closing tag's indentation
                    self._append(parent, node)
                    return f"after last <{anchor.tag}>"
                node.tail = sibling.tail
                _indent_children(node, _indent_of(sibling.tail))
                sibling.addnext(node)
                return f"after last <{anchor.tag}>"

            if anchor.kind == AnchorKind.FIRST_CHILD:
                if len(parent):
                    node.tail = parent.text
                _indent_children(node, _indent_of(parent.text))
                parent.insert(0, node)
                return "first child"

            if anchor.kind == AnchorKind.LAST_CHILD:
                break

        self._append(parent, node)
        return "last child"

    @staticmethod
    def _append(parent: etree._Element, node: etree._Element) -> None:
        children = list(parent)
        if children:
            last = children[-1]
            inner = children[-2].tail if len(children) > 1 else parent.text
            node.tail = last.tail
            last.tail = inner
            _indent_children(node, _indent_of(inner))
        parent.append(node)

    # ------------------------------------------------------------------
    # Indices
    # ------------------------------------------------------------------

    def _ensure_indexed(self) -> None:
        if self._indexed:
            return

        root = self.root
        node_count = 0
        for element in root.iter(tag=etree.Element):
            self._index_node(element)
            node_count += 1

        self._indexed = True
        self.logger.debug(
            f"{self.label}: indexed {node_count} elements, "
            f"{len(self._rel_by_triple)} relations"
        )

    def _index_node(self, element: etree._Element) -> None:
        uid = object_uid(element)
        if uid is not None:
            self._identity[element.tag].setdefault(uid, element)
            self._names[element.tag][normalize_name(object_name(element))].append(element)

        if element.tag == RELATION_TAG:
            self._index_relation(element)

    def _index_relation(self, rel: etree._Element) -> None:
        triple = relation_triple(rel)
        if triple is None:
            return
        uid1, uid2, def_uid = triple
        self._rel_by_source[(uid1, def_uid)].append(rel)
        self._rel_by_target[(uid2, def_uid)].append(rel)
        self._rel_by_triple.setdefault(triple, rel)

    def _unindex_relation(self, rel: etree._Element, triple: RelationTriple) -> None:
        uid1, uid2, def_uid = triple
        self._rel_by_source[(uid1, def_uid)].remove(rel)
        self._rel_by_target[(uid2, def_uid)].remove(rel)
        if self._rel_by_triple.get(triple) is rel:
            del self._rel_by_triple[triple]

    def __repr__(self) -> str:
        return f"DocumentStore(label={self.label!r}, source={self.source_path})"


def _indent_of(whitespace: Optional[str]) -> Optional[str]:
    """Indentation of the line following a whitespace run, if it is one."""
    if not whitespace or '\n' not in whitespace or whitespace.strip():
        return None
    return whitespace.rsplit('\n', 1)[1]


def _indent_children(node: etree._Element, indent: Optional[str]) -> None:
    """Lay out a new node's children one per line, one level deeper."""
    if indent is None or not len(node):
        return
    step = '\t' if indent.startswith('\t') else '  '
    node.text = '\n' + indent + step
    children = list(node)
    for child in children[:-1]:
        child.tail = '\n' + indent + step
    children[-1].tail = '\n' + indent


__all__ = ['DocumentStore']
