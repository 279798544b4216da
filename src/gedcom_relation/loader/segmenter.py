# src/gedcom_relation/loader/segmenter.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from gedcom_relation.core.exceptions import StructuralError

from .tokenizer import LineRecord, pointer_target

CONTINUATION_TAG = "CONT"
CONCATENATION_TAG = "CONC"
ROOT_TAG = "ROOT"


@dataclass(eq=False)
class GEDCOMNode:
    """
    A hierarchical GEDCOM tree node produced from a flat line stream.

    Attributes:
        level: GEDCOM level number (0 for records, >0 for substructures,
            -1 for the synthetic document root).
        tag: The GEDCOM tag (HEAD, INDI, BIRT, DATE, NOTE, etc.).
        value: The logical value with CONT/CONC lines merged in, or None.
        xref_id: Declared cross-reference id (bare, e.g. "I1"), or None.
        lineno: Line number in original document (for diagnostics).
        index: Position of the node in document order; stable arena handle.
        children: Nested GEDCOMNode list ordered as they appeared.
    """

    level: int
    tag: str
    value: Optional[str] = None
    xref_id: Optional[str] = None
    lineno: int = 0
    index: int = -1
    children: List["GEDCOMNode"] = field(default_factory=list)

    # ---------- Helper / Mixin Methods ----------

    @property
    def pointer(self) -> Optional[str]:
        return f"@{self.xref_id}@" if self.xref_id else None

    @property
    def pointer_value(self) -> Optional[str]:
        """Bare id named by this node's value when the value is a pointer."""
        return pointer_target(self.value)

    def find_children(self, tag: str) -> List["GEDCOMNode"]:
        """Return all direct children of this node with a given tag."""
        return [c for c in self.children if c.tag == tag]

    def find_first(self, tag: str) -> Optional["GEDCOMNode"]:
        """Return the first direct child with this tag, or None."""
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    def first_value(self, tag: str) -> Optional[str]:
        child = self.find_first(tag)
        return child.value if child is not None else None

    def iter_subtree(self) -> Iterator["GEDCOMNode"]:
        """Yield this node and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def __repr__(self) -> str:
        ptr = f" {self.pointer}" if self.xref_id else ""
        return f"<GEDCOMNode {self.level}{ptr} {self.tag}: {self.value!r}>"


# ---------- SEGMENTER IMPLEMENTATION ----------

def _merge_value(parent: GEDCOMNode, record: LineRecord) -> None:
    base = parent.value or ""
    addition = record.value or ""
    if record.tag == CONTINUATION_TAG:
        parent.value = base + "\n" + addition
    else:
        parent.value = base + addition


def segment_lines(records: Iterable[LineRecord]) -> GEDCOMNode:
    """
    Convert a flat sequence of LineRecords into a tree under a synthetic root.

    Rules:
        - The first line must be level 0; level-0 lines become records.
        - A level-N line is a child of the nearest open node at level N-1.
        - Levels may not jump more than +1 (e.g. level 3 cannot follow level 1).
        - CONT appends a newline plus its value to the open parent's value;
          CONC appends its value directly. Neither creates a node.

    Nodes receive consecutive ``index`` values in document order, which is
    also the depth-first pre-order of the resulting tree.

    Raises:
        StructuralError: on a level jump, a non-zero first level, or a
            CONT/CONC line with no open parent.
    """
    root = GEDCOMNode(level=-1, tag=ROOT_TAG)
    stack: List[GEDCOMNode] = []  # stack[level] = open node at that level
    next_index = 0
    seen_first = False

    for rec in records:
        if rec.tag in (CONTINUATION_TAG, CONCATENATION_TAG):
            if rec.level == 0 or rec.level > len(stack):
                raise StructuralError(
                    f"Line {rec.lineno}: {rec.tag} at level {rec.level} has no open parent "
                    f"at level {rec.level - 1}",
                    lineno=rec.lineno,
                )
            _merge_value(stack[rec.level - 1], rec)
            del stack[rec.level:]
            continue

        if not seen_first and rec.level != 0:
            raise StructuralError(
                f"Line {rec.lineno}: first line must be level 0, got level {rec.level}",
                lineno=rec.lineno,
            )
        seen_first = True

        if rec.level > len(stack):
            raise StructuralError(
                f"Line {rec.lineno}: Level jumped from {len(stack) - 1} to {rec.level} "
                "without intermediate parent",
                lineno=rec.lineno,
            )

        # Pop the stack down to the parent level
        del stack[rec.level:]
        parent = stack[-1] if stack else root

        node = GEDCOMNode(
            level=rec.level,
            tag=rec.tag,
            value=rec.value,
            xref_id=rec.xref_id,
            lineno=rec.lineno,
            index=next_index,
        )
        next_index += 1

        parent.children.append(node)
        stack.append(node)

    return root


def segment_records(records: Iterable[LineRecord]) -> List[GEDCOMNode]:
    """
    Convenience wrapper: build the tree and return only level-0 nodes.
    """
    return segment_lines(records).children
