# tests/test_build_individual.py

from __future__ import annotations

from datetime import datetime

import pytest

from gedcom_relation.core.exceptions import StructuralError
from gedcom_relation.dates import ExactDate
from gedcom_relation.loader import build_tree, tokenize_text
from gedcom_relation.registry import FindingKind, Sex, build_individual, split_name
from gedcom_relation.xref import resolve_references


def _build(text: str, xref_id: str = "I1"):
    graph = resolve_references(build_tree(tokenize_text(text)))
    findings = []
    individual = build_individual(graph.node_for(xref_id), graph, findings)
    return individual, findings


FULL_INDI = (
    "0 @I1@ INDI\n"
    "1 NAME Gavin /Henderson/\n"
    "2 GIVN Gavin\n"
    "2 SURN Henderson\n"
    "2 _PRIM Y\n"
    "1 SEX M\n"
    "1 BIRT\n"
    "2 _PRIM Y\n"
    "2 DATE 1 Jan 1990\n"
    "2 PLAC Dundee\n"
    "1 FAMC @F1@\n"
    "1 _UID 9ACF01CA\n"
    "1 CHAN\n"
    "2 DATE 15 APR 2020\n"
    "3 TIME 16:19:21\n"
    "0 @F1@ FAM\n"
    "1 CHIL @I1@\n"
)


def test_build_individual_basic() -> None:
    ind, findings = _build(FULL_INDI)

    assert ind.id == "I1"
    assert ind.sex is Sex.MALE
    assert len(ind.names) == 1
    assert ind.names[0].full == "Gavin /Henderson/"
    assert ind.names[0].given == "Gavin"
    assert ind.names[0].surname == "Henderson"
    assert ind.names[0].preferred is True
    assert [f.tag for f in ind.facts] == ["BIRT"]
    assert ind.facts[0].date == ExactDate(1990, 1, 1)
    assert ind.families_as_child == ["F1"]
    assert ind.family_links == {"F1"}
    assert ind.date_created == datetime(2020, 4, 15, 16, 19, 21)
    assert ind.is_living is True
    assert findings == []

    # Lossless: _UID lands in attributes
    assert any(a.tag == "_UID" and a.value == "9ACF01CA" for a in ind.attributes)
    assert not any(a.tag in {"NAME", "BIRT", "CHAN"} for a in ind.attributes)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Gavin /Henderson/", ("Gavin", "Henderson")),
        ("Mary Ann /Smith/ Jr", ("Mary Ann", "Smith")),
        ("/Henderson/", (None, "Henderson")),
        ("Gavin", ("Gavin", None)),
        ("", (None, None)),
        (None, (None, None)),
    ],
)
def test_split_name(value, expected) -> None:
    assert split_name(value) == expected


def test_name_without_givn_surn_is_split_from_value() -> None:
    ind, _ = _build("0 @I1@ INDI\n1 NAME Jane /Reed/\n1 SEX F\n1 CHAN\n2 DATE 1 JAN 2020\n")
    assert (ind.names[0].given, ind.names[0].surname) == ("Jane", "Reed")
    assert ind.names[0].preferred is False


@pytest.mark.parametrize("value, sex", [("M", Sex.MALE), ("f", Sex.FEMALE), ("U", Sex.OTHER), (None, Sex.OTHER)])
def test_sex_values(value, sex) -> None:
    line = f"1 SEX {value}\n" if value else "1 SEX\n"
    ind, findings = _build(f"0 @I1@ INDI\n{line}1 CHAN\n2 DATE 1 JAN 2020\n")
    assert ind.sex is sex
    assert findings == []


def test_missing_sex_and_creation_date_are_findings() -> None:
    ind, findings = _build("0 @I1@ INDI\n1 NAME Jane /Doe/\n")

    assert ind.sex is None
    assert ind.date_created is None
    assert [(f.kind, f.entity_type, f.entity_id, f.field) for f in findings] == [
        (FindingKind.MISSING_FIELD, "INDI", "I1", "sex"),
        (FindingKind.MISSING_FIELD, "INDI", "I1", "date_created"),
    ]


def test_change_date_without_time_is_midnight() -> None:
    ind, findings = _build("0 @I1@ INDI\n1 SEX F\n1 CHAN\n2 DATE 3 MAR 2021\n")
    assert ind.date_created == datetime(2021, 3, 3, 0, 0, 0)
    assert findings == []


@pytest.mark.parametrize(
    "chan",
    [
        "1 CHAN\n",
        "1 CHAN\n2 DATE MAR 2021\n",
        "1 CHAN\n2 DATE 31 FEB 2021\n",
        "1 CHAN\n2 DATE 3 MAR 2021\n3 TIME quarter past\n",
    ],
)
def test_unreadable_change_date_is_invalid_finding(chan) -> None:
    ind, findings = _build(f"0 @I1@ INDI\n1 SEX F\n{chan}")
    assert ind.date_created is None
    assert len(findings) == 1
    assert findings[0].kind is FindingKind.INVALID_FIELD
    assert findings[0].field == "date_created"


def test_death_like_fact_means_not_living() -> None:
    ind, _ = _build("0 @I1@ INDI\n1 SEX F\n1 BURI\n2 PLAC Perth\n")
    assert ind.is_living is False


def test_family_pointer_to_individual_is_structural_error() -> None:
    with pytest.raises(StructuralError):
        _build("0 @I1@ INDI\n1 FAMS @I2@\n0 @I2@ INDI\n")


def test_non_indi_node_is_rejected() -> None:
    graph = resolve_references(build_tree(tokenize_text("0 @F1@ FAM\n")))
    with pytest.raises(ValueError):
        build_individual(graph.node_for("F1"), graph, [])
