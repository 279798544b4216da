# tests/test_xref_resolver.py

from __future__ import annotations

import pytest

from gedcom_relation.core.exceptions import DuplicateReference, UnresolvedReference
from gedcom_relation.loader import build_tree, tokenize_file, tokenize_text
from gedcom_relation.utils import mock_file_path
from gedcom_relation.xref import build_xref_registry, resolve_references


def _resolve(text: str):
    return resolve_references(build_tree(tokenize_text(text)))


def test_single_individual_has_no_references() -> None:
    graph = _resolve("0 HEAD\n0 @I1@ INDI\n1 NAME Jane /Doe/\n0 TRLR\n")
    assert graph.reference_count == 0
    assert list(graph.iter_links()) == []
    assert graph.node_for("I1").tag == "INDI"


def test_registry_maps_ids_to_arena_handles() -> None:
    tree = build_tree(tokenize_text("0 @I1@ INDI\n0 @F1@ FAM\n1 CHIL @I1@\n"))
    registry = build_xref_registry(tree)

    assert len(registry) == 2
    assert "I1" in registry
    assert "@I1@" not in registry
    assert tree.nodes[registry.handle_for("F1")].tag == "FAM"


def test_every_link_targets_the_exact_declared_id() -> None:
    graph = resolve_references(build_tree(tokenize_file(mock_file_path("siblings.ged"))))

    assert graph.reference_count > 0
    for source, target in graph.iter_links():
        assert target.xref_id == source.pointer_value
        assert source.value == f"@{target.xref_id}@"


def test_links_do_not_change_tree_ownership() -> None:
    graph = _resolve(
        "0 @I1@ INDI\n1 FAMC @F1@\n0 @I2@ INDI\n1 FAMC @F1@\n0 @F1@ FAM\n1 CHIL @I1@\n1 CHIL @I2@\n"
    )
    family = graph.node_for("F1")
    famc_nodes = [n for n in graph.arena if n.tag == "FAMC"]

    assert [graph.target_of(n) for n in famc_nodes] == [family, family]
    assert [r.tag for r in graph.records] == ["INDI", "INDI", "FAM"]
    assert [c.tag for c in family.children] == ["CHIL", "CHIL"]


def test_prefix_ids_do_not_match() -> None:
    with pytest.raises(UnresolvedReference) as info:
        _resolve("0 @I10@ INDI\n0 @F1@ FAM\n1 HUSB @I1@\n")
    assert info.value.xref_id == "I1"


def test_escape_values_are_not_pointers() -> None:
    graph = _resolve("0 @I1@ INDI\n1 BIRT\n2 DATE @#DJULIAN@ 1 JAN 1700\n")
    assert graph.reference_count == 0


def test_duplicate_declaration_raises() -> None:
    with pytest.raises(DuplicateReference) as info:
        _resolve("0 @I1@ INDI\n1 NAME A\n0 @I1@ INDI\n1 NAME B\n")
    assert info.value.xref_id == "I1"
    assert info.value.lineno == 3


def test_first_unresolved_pointer_in_preorder_is_reported() -> None:
    with pytest.raises(UnresolvedReference) as info:
        _resolve(
            "0 @I1@ INDI\n"
            "1 FAMS @F9@\n"
            "0 @F1@ FAM\n"
            "1 HUSB @I1@\n"
            "1 CHIL @I7@\n"
        )
    assert info.value.xref_id == "F9"
    assert info.value.lineno == 2


def test_undeclared_child_is_unresolved() -> None:
    with pytest.raises(UnresolvedReference) as info:
        _resolve("0 @I1@ INDI\n0 @F1@ FAM\n1 HUSB @I1@\n1 CHIL @I2@\n")
    assert info.value.xref_id == "I2"
    assert "@I2@" in str(info.value)
