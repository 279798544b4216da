# src/gedcom_relation/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_relation.loader import (
        LineRecord,
        GEDCOMNode,
        GEDCOMTree,
        tokenize_text,
        tokenize_file,
        tokenize_line,
        segment_lines,
        build_tree,
    )
"""

from __future__ import annotations

from .segmenter import GEDCOMNode, segment_lines, segment_records
from .tokenizer import (
    LineRecord,
    pointer_target,
    read_document,
    tokenize_file,
    tokenize_line,
    tokenize_text,
)
from .tree_builder import GEDCOMTree, build_tree

__all__ = [
    "LineRecord",
    "GEDCOMNode",
    "GEDCOMTree",
    "pointer_target",
    "read_document",
    "tokenize_file",
    "tokenize_line",
    "tokenize_text",
    "segment_lines",
    "segment_records",
    "build_tree",
]
