"""
json_exporter.py
Serializes schema documents to JSON text and files.

Compact output (no whitespace) unless an indent is given, matching what the
schema owner's importer produces itself.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from gedcom_relation.logging import get_logger

log = get_logger(__name__)

COMPACT_SEPARATORS = (",", ":")


def serialize_document(document: Dict[str, Any], indent: Optional[int] = None) -> str:
    if indent is None:
        return json.dumps(document, ensure_ascii=False, separators=COMPACT_SEPARATORS)
    return json.dumps(document, ensure_ascii=False, indent=indent)


def export_document_json(
    document: Dict[str, Any],
    output_path: str | Path,
    indent: Optional[int] = None,
) -> Path:
    """Write ``document`` to ``output_path`` (parents created) and return the path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting JSON to: %s (Persons=%d, Familys=%d, Childs=%d)",
        output_path,
        len(document.get("Persons", [])),
        len(document.get("Familys", [])),
        len(document.get("Childs", [])),
    )

    json_str = serialize_document(document, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    return output_path
