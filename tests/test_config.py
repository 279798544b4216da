from __future__ import annotations

import pytest

from gedcom_relation.config import get_config, load_config, use_config
from gedcom_relation.core.pipeline import convert_text
from gedcom_relation.utils import mock_file_path


def test_defaults_fill_missing_keys(tmp_path) -> None:
    path = tmp_path / "partial.yml"
    path.write_text("schema:\n  family_id_start: 500\n", encoding="utf-8")

    cfg = load_config(path)

    assert cfg.schema["family_id_start"] == 500
    assert cfg.schema["person_id_start"] == 1
    assert cfg.pipeline["output_suffix"] == ".json"
    assert cfg.debug is False


def test_explicit_missing_config_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_use_config_changes_schema_numbering(tmp_path) -> None:
    path = tmp_path / "schema.yml"
    path.write_text(
        "schema:\n"
        "  person_id_start: 7\n"
        "  family_id_start: 70\n"
        "  child_id_start: 700\n"
        "  fact_type_ids:\n"
        "    birt: 9405\n",
        encoding="utf-8",
    )
    use_config(path)
    assert get_config().schema["person_id_start"] == 7

    document = convert_text(mock_file_path("three_node.ged").read_text(encoding="utf-8")).document

    assert [p["Id"] for p in document["Persons"]] == [7, 8, 9]
    assert document["Familys"][0]["Id"] == 70
    assert document["Childs"][0]["Id"] == 700
    assert document["Persons"][0]["Facts"][0]["FactTypeId"] == 9405
