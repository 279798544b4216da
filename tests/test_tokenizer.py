# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from gedcom_relation.core.exceptions import MalformedLine
from gedcom_relation.loader import pointer_target, tokenize_file, tokenize_line, tokenize_text
from gedcom_relation.utils import mock_file_path


def test_tokenize_line_simple_head() -> None:
    token = tokenize_line("0 HEAD", lineno=1)
    assert token.lineno == 1
    assert token.level == 0
    assert token.xref_id is None
    assert token.pointer is None
    assert token.tag == "HEAD"
    assert token.value is None


def test_tokenize_line_with_xref_and_tag_only() -> None:
    token = tokenize_line("0 @I1@ INDI", lineno=1)
    assert token.level == 0
    assert token.xref_id == "I1"
    assert token.pointer == "@I1@"
    assert token.tag == "INDI"
    assert token.value is None


def test_tokenize_line_with_value() -> None:
    token = tokenize_line("1 NOTE This is a test note", lineno=10)
    assert token.level == 1
    assert token.tag == "NOTE"
    assert token.value == "This is a test note"


def test_value_keeps_embedded_delimiters_and_inner_spaces() -> None:
    token = tokenize_line("2 NOTE see @I1@ and  @F1@ ", lineno=3)
    assert token.value == "see @I1@ and  @F1@ "


def test_leading_whitespace_and_custom_tags() -> None:
    token = tokenize_line("  \t1 _PRIM Y", lineno=2)
    assert token.level == 1
    assert token.tag == "_PRIM"
    assert token.value == "Y"


def test_pointer_value_is_not_a_declaration() -> None:
    token = tokenize_line("1 FAMC @F1@", lineno=4)
    assert token.xref_id is None
    assert token.value == "@F1@"
    assert pointer_target(token.value) == "F1"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("@I1@", "I1"),
        ("@SUBM1@", "SUBM1"),
        ("@#DGREGORIAN@ 1 JAN 1900", None),
        ("@#DJULIAN@", None),
        ("Jane @home@ Doe", None),
        ("", None),
        (None, None),
    ],
)
def test_pointer_target(value, expected) -> None:
    assert pointer_target(value) == expected


@pytest.mark.parametrize(
    "line, reason",
    [
        ("X HEAD", "level is not numeric"),
        ("01 NAME Jane", "level has a leading zero"),
        ("100 NAME Jane", "level out of range"),
        ("0 ", "missing tag after level"),
        ("0 @I1 INDI", "malformed cross-reference id"),
        ("0 @I1@", "cross-reference id present but missing tag"),
        ("1 NA-ME Jane", "invalid tag"),
    ],
)
def test_tokenize_line_rejects_malformed_lines(line, reason) -> None:
    with pytest.raises(MalformedLine) as info:
        tokenize_line(line, lineno=7)
    assert info.value.lineno == 7
    assert info.value.text == line
    assert info.value.reason == reason


def test_tokenize_text_strips_leading_bom_only() -> None:
    records = list(tokenize_text("\ufeff0 HEAD\n0 TRLR\n"))
    assert [r.tag for r in records] == ["HEAD", "TRLR"]


def test_bom_inside_a_value_is_kept_literally() -> None:
    records = list(tokenize_text("0 HEAD\n1 NOTE a\ufeffb\n"))
    assert records[1].value == "a\ufeffb"


def test_bom_before_a_later_level_is_malformed() -> None:
    with pytest.raises(MalformedLine) as info:
        list(tokenize_text("0 HEAD\n\ufeff0 TRLR\n"))
    assert info.value.lineno == 2


@pytest.mark.parametrize("newline", ["\n", "\r\n", "\r", "\n\r"])
def test_line_endings_are_normalized(newline) -> None:
    text = newline.join(["0 HEAD", "1 CHAR UTF-8", "0 TRLR"]) + newline
    records = list(tokenize_text(text))
    assert [(r.lineno, r.tag) for r in records] == [(1, "HEAD"), (2, "CHAR"), (3, "TRLR")]


def test_blank_lines_are_skipped_but_counted() -> None:
    records = list(tokenize_text("0 HEAD\n\n   \n0 TRLR"))
    assert [(r.lineno, r.tag) for r in records] == [(1, "HEAD"), (4, "TRLR")]


def test_tokenize_text_is_lazy_and_restartable() -> None:
    text = "0 HEAD\n1 CHAR UTF-8\nnot a line\n"
    stream = tokenize_text(text)
    assert next(stream).tag == "HEAD"
    assert next(stream).tag == "CHAR"
    with pytest.raises(MalformedLine):
        next(stream)

    again = tokenize_text(text)
    assert next(again).tag == "HEAD"


def test_malformed_line_reports_line_number() -> None:
    with pytest.raises(MalformedLine) as info:
        list(tokenize_text("0 HEAD\n1 SOUR X\nbroken\n"))
    assert info.value.lineno == 3
    assert "broken" in str(info.value)


def test_tokenize_file_reads_existing_mock_file() -> None:
    tokens = list(tokenize_file(mock_file_path("one_node.ged")))

    assert tokens
    assert tokens[0].tag == "HEAD"
    assert tokens[-1].tag == "TRLR"
    assert any(t.xref_id == "I1" and t.tag == "INDI" for t in tokens)


def test_tokenize_file_missing_path_raises() -> None:
    with pytest.raises(FileNotFoundError):
        tokenize_file(mock_file_path("does_not_exist.ged"))


@pytest.mark.parametrize("xref", ["I1", "I 1", "F-12", "SUBM1", "a#b"])
def test_declared_ids_and_pointer_values_share_one_grammar(xref) -> None:
    declared = tokenize_line(f"0 @{xref}@ INDI", lineno=1)
    pointing = tokenize_line(f"1 HUSB @{xref}@", lineno=2)
    assert declared.xref_id == xref
    assert pointer_target(pointing.value) == xref


@pytest.mark.parametrize("xref", ["#DJULIAN", " I1", ""])
def test_rejected_ids_are_neither_declarations_nor_pointers(xref) -> None:
    assert pointer_target(f"@{xref}@") is None
    with pytest.raises(MalformedLine) as info:
        tokenize_line(f"0 @{xref}@ INDI", lineno=1)
    assert info.value.reason == "malformed cross-reference id"
