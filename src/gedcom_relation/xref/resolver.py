"""
Cross-reference registry and resolver.

Pass 1 registers every node that declares an ``@ID@`` against its arena
handle (``GEDCOMNode.index``). Pass 2 walks the tree in pre-order and links
every pointer-shaped value to the registered node. Links are non-owning:
they map a node handle to a target handle in the same arena, so families and
individuals can reference each other without any change to tree ownership.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from gedcom_relation.core.exceptions import DuplicateReference, UnresolvedReference
from gedcom_relation.loader import GEDCOMNode, GEDCOMTree
from gedcom_relation.logging import get_logger

log = get_logger(__name__)


@dataclass
class XrefRegistry:
    """Mapping from declared id to the arena handle of the declaring node."""

    handles: Dict[str, int] = field(default_factory=dict)

    def register(self, node: GEDCOMNode) -> None:
        xref_id = node.xref_id
        if xref_id is None:
            return
        if xref_id in self.handles:
            raise DuplicateReference(xref_id, lineno=node.lineno)
        self.handles[xref_id] = node.index

    def handle_for(self, xref_id: str) -> Optional[int]:
        return self.handles.get(xref_id)

    def __contains__(self, xref_id: object) -> bool:
        return xref_id in self.handles

    def __len__(self) -> int:
        return len(self.handles)


@dataclass
class ResolvedGraph:
    """
    The document tree plus its cross-reference annotations.

    Attributes:
        tree: The owning GEDCOMTree (unchanged by resolution).
        registry: Declared id -> arena handle.
        links: Handle of a pointer-valued node -> handle of its target.
    """

    tree: GEDCOMTree
    registry: XrefRegistry
    links: Dict[int, int] = field(default_factory=dict)

    @property
    def arena(self) -> List[GEDCOMNode]:
        return self.tree.nodes

    @property
    def records(self) -> List[GEDCOMNode]:
        return self.tree.records

    @property
    def reference_count(self) -> int:
        return len(self.links)

    def node_for(self, xref_id: str) -> Optional[GEDCOMNode]:
        """Return the node that declared ``xref_id``, if any."""
        handle = self.registry.handle_for(xref_id)
        return self.arena[handle] if handle is not None else None

    def target_of(self, node: GEDCOMNode) -> Optional[GEDCOMNode]:
        """Return the node a pointer-valued node links to, or None."""
        handle = self.links.get(node.index)
        return self.arena[handle] if handle is not None else None

    def iter_links(self) -> Iterator[Tuple[GEDCOMNode, GEDCOMNode]]:
        """Yield (referring node, target node) pairs in document order."""
        for source, target in sorted(self.links.items()):
            yield self.arena[source], self.arena[target]


def build_xref_registry(tree: GEDCOMTree) -> XrefRegistry:
    """
    Register every declared cross-reference id in pre-order.

    Raises:
        DuplicateReference: when an id is declared twice.
    """
    registry = XrefRegistry()
    for node in tree.iter_nodes():
        registry.register(node)
    return registry


def resolve_references(tree: GEDCOMTree) -> ResolvedGraph:
    """
    Resolve every pointer-shaped value of ``tree`` against its declarations.

    Raises:
        DuplicateReference: when an id is declared twice.
        UnresolvedReference: for the first pointer (pre-order, children in
            source order) that names an undeclared id.
    """
    registry = build_xref_registry(tree)
    graph = ResolvedGraph(tree=tree, registry=registry)

    for node in tree.iter_nodes():
        target_id = node.pointer_value
        if target_id is None:
            continue
        handle = registry.handle_for(target_id)
        if handle is None:
            raise UnresolvedReference(target_id, lineno=node.lineno)
        graph.links[node.index] = handle

    log.debug(
        "Resolved %d cross-references against %d declarations",
        graph.reference_count,
        len(registry),
    )
    return graph
