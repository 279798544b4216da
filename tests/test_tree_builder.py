# tests/test_tree_builder.py

from __future__ import annotations

import pytest

from gedcom_relation.core.exceptions import StructuralError
from gedcom_relation.loader import (
    GEDCOMTree,
    build_tree,
    segment_records,
    tokenize_file,
    tokenize_text,
)
from gedcom_relation.utils import mock_file_path


def _tree(text: str) -> GEDCOMTree:
    return build_tree(tokenize_text(text))


def test_build_tree_on_mock_file() -> None:
    tree = build_tree(tokenize_file(mock_file_path("three_node.ged")))

    assert isinstance(tree, GEDCOMTree)
    assert [r.tag for r in tree.records] == ["HEAD", "SUBM", "INDI", "INDI", "INDI", "FAM", "TRLR"]
    assert tree.all_tags() == ["FAM", "HEAD", "INDI", "SUBM", "TRLR"]
    assert len(tree.find_records_by_tag("indi")) == 3


def test_children_follow_source_order_and_levels() -> None:
    tree = _tree(
        "0 @I1@ INDI\n"
        "1 NAME Jane /Doe/\n"
        "2 GIVN Jane\n"
        "2 SURN Doe\n"
        "1 SEX F\n"
        "1 BIRT\n"
        "2 DATE 1900\n"
    )
    indi = tree.records[0]
    assert indi.xref_id == "I1"
    assert [c.tag for c in indi.children] == ["NAME", "SEX", "BIRT"]
    assert [c.tag for c in indi.children[0].children] == ["GIVN", "SURN"]
    for child in indi.children:
        assert child.level == indi.level + 1


def test_nodes_are_indexed_in_document_order() -> None:
    tree = _tree("0 HEAD\n1 CHAR UTF-8\n0 @I1@ INDI\n1 NAME Jane\n0 TRLR\n")
    assert [n.tag for n in tree.nodes] == ["HEAD", "CHAR", "INDI", "NAME", "TRLR"]
    assert all(tree.nodes[n.index] is n for n in tree.nodes)
    assert [n.lineno for n in tree.nodes] == [1, 2, 3, 4, 5]


def test_depth_matches_maximum_level() -> None:
    tree = _tree(
        "0 HEAD\n"
        "1 SOUR X\n"
        "2 CORP Y\n"
        "3 ADDR Z\n"
        "4 CITY London\n"
        "0 @I1@ INDI\n"
        "1 NAME Jane /Doe/\n"
        "0 TRLR\n"
    )
    assert tree.depth() == 4


def test_depth_of_flat_and_empty_documents() -> None:
    assert _tree("0 HEAD\n0 TRLR\n").depth() == 0
    assert _tree("").depth() == -1


def test_siblings_after_deeper_nesting_attach_to_right_parent() -> None:
    tree = _tree("0 @I1@ INDI\n1 BIRT\n2 DATE 1900\n3 TIME 10:00\n1 DEAT\n0 TRLR\n")
    indi = tree.records[0]
    assert [c.tag for c in indi.children] == ["BIRT", "DEAT"]
    assert tree.records[1].tag == "TRLR"


def test_level_jump_raises_structural_error() -> None:
    with pytest.raises(StructuralError) as info:
        _tree("0 @I1@ INDI\n1 BIRT\n3 DATE 1900\n")
    assert info.value.lineno == 3
    assert "Level jumped from 1 to 3" in str(info.value)


def test_first_line_must_be_level_zero() -> None:
    with pytest.raises(StructuralError) as info:
        _tree("1 NAME Jane\n")
    assert info.value.lineno == 1


def test_segment_records_returns_top_level_only() -> None:
    records = segment_records(tokenize_text("0 HEAD\n1 CHAR UTF-8\n0 TRLR\n"))
    assert [r.tag for r in records] == ["HEAD", "TRLR"]
    assert records[0].first_value("CHAR") == "UTF-8"
