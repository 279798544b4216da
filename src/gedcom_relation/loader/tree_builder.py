# src/gedcom_relation/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List

from .segmenter import GEDCOMNode, segment_lines
from .tokenizer import LineRecord


@dataclass
class GEDCOMTree:
    """
    High-level wrapper around the synthetic root of a parsed document.

    This structure is the canonical representation of a parsed GEDCOM file
    for downstream components (cross-reference resolution, model building).

    Attributes:
        root:
            Synthetic node whose children are the level-0 records (HEAD,
            INDI, FAM, SOUR, NOTE, TRLR, ...).
        nodes:
            Every real node in document order; ``nodes[n.index] is n``.
    """

    root: GEDCOMNode
    nodes: List[GEDCOMNode] = field(default_factory=list)

    _tag_index: Dict[str, List[GEDCOMNode]] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if not self.nodes:
            self.nodes = list(self.iter_nodes())

    # ------------------------------------------------------------------ #
    # Core helpers
    # ------------------------------------------------------------------ #

    @property
    def records(self) -> List[GEDCOMNode]:
        return self.root.children

    def __len__(self) -> int:  # pragma: no cover - trivial wrapper
        return len(self.records)

    def __iter__(self) -> Iterator[GEDCOMNode]:  # pragma: no cover - simple
        return iter(self.records)

    def iter_nodes(self) -> Iterator[GEDCOMNode]:
        """
        Iterate over every node in the tree (depth-first pre-order),
        excluding the synthetic root.
        """
        for record in self.records:
            yield from record.iter_subtree()

    def depth(self) -> int:
        """
        Number of edges from a level-0 record to the deepest descendant,
        measured on the built tree. -1 for an empty document.
        """
        def _depth(node: GEDCOMNode) -> int:
            return 1 + max((_depth(c) for c in node.children), default=-1)

        return max((_depth(r) for r in self.records), default=-1)

    # ------------------------------------------------------------------ #
    # Public query API
    # ------------------------------------------------------------------ #

    def find_records_by_tag(self, tag: str) -> List[GEDCOMNode]:
        """
        Return all level-0 records with the given tag (case-insensitive).
        """
        if not tag:
            return []
        if not self._tag_index:
            for rec in self.records:
                self._tag_index.setdefault(rec.tag.upper(), []).append(rec)
        return list(self._tag_index.get(tag.upper(), []))

    def all_tags(self) -> List[str]:
        """
        Return a list of distinct tags found among level-0 records.
        """
        return sorted({rec.tag for rec in self.records if rec.tag})

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<GEDCOMTree records={len(self.records)} nodes={len(self.nodes)}>"


def build_tree(records: Iterable[LineRecord]) -> GEDCOMTree:
    """
    Build a GEDCOMTree from a line record stream.

    This function is the main entry point for the loader pipeline:

        line records -> GEDCOMTree(root=<ROOT>[GEDCOMNode, ...])

    The input is consumed completely before the tree is returned.
    """
    root = segment_lines(records)
    return GEDCOMTree(root=root)
