"""
Exporter package.

Re-exports the schema mapper and the JSON writers used by the pipeline.
"""

from __future__ import annotations

from .json_exporter import export_document_json, serialize_document
from .schema import DEFAULT_FACT_TYPE_IDS, SchemaMapper, map_to_schema

__all__ = [
    "DEFAULT_FACT_TYPE_IDS",
    "SchemaMapper",
    "export_document_json",
    "map_to_schema",
    "serialize_document",
]
