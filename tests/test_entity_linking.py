# tests/test_entity_linking.py

from __future__ import annotations

from gedcom_relation.loader import build_tree, tokenize_file, tokenize_text
from gedcom_relation.registry import FindingKind, build_domain_model, link_entities
from gedcom_relation.utils import mock_file_path
from gedcom_relation.xref import resolve_references


def _model(text: str):
    return build_domain_model(resolve_references(build_tree(tokenize_text(text))))


def test_domain_model_from_mock_file() -> None:
    model = build_domain_model(
        resolve_references(build_tree(tokenize_file(mock_file_path("siblings.ged"))))
    )

    assert list(model.individuals) == ["I1", "I2", "I3", "I4"]
    assert list(model.families) == ["F1"]
    family = model.get_family("F1")
    assert family.spouse_ids == {"I3", "I2"}
    assert family.child_ids == ["I1", "I4"]
    assert model.get_individual("I4").families_as_child == ["F1"]
    assert model.fact_count == 3
    assert model.findings == []


def test_two_spouses_one_child() -> None:
    model = _model(
        "0 @I1@ INDI\n0 @I2@ INDI\n0 @I3@ INDI\n"
        "0 @F1@ FAM\n1 HUSB @I1@\n1 WIFE @I2@\n1 CHIL @I3@\n"
    )
    family = model.families["F1"]
    assert family.spouse_ids == {"I2", "I1"}
    assert family.child_ids == ["I3"]


def test_record_type_comes_from_tag_not_position() -> None:
    model = _model("0 @X9@ FAM\n0 @A1@ INDI\n0 HEAD\n0 @N1@ NOTE text\n")
    assert list(model.families) == ["X9"]
    assert list(model.individuals) == ["A1"]


def test_missing_links_are_implied_from_family_records() -> None:
    model = _model("0 @I1@ INDI\n0 @I2@ INDI\n0 @F1@ FAM\n1 HUSB @I1@\n1 CHIL @I2@\n")

    assert model.individuals["I1"].families_as_spouse == ["F1"]
    assert model.individuals["I2"].families_as_child == ["F1"]
    assert model.individuals["I2"].family_links == {"F1"}

    # Idempotent
    assert link_entities(model) == 0


def test_findings_accumulate_across_entities() -> None:
    model = _model("0 @I1@ INDI\n1 SEX M\n0 @I2@ INDI\n1 SEX F\n0 @F1@ FAM\n")
    assert [(f.entity_id, f.field) for f in model.findings] == [
        ("I1", "date_created"),
        ("I2", "date_created"),
        ("F1", "date_created"),
    ]
    assert all(f.kind is FindingKind.MISSING_FIELD for f in model.findings)
