from __future__ import annotations

from .exceptions import (
    ConversionError,
    DuplicateReference,
    MalformedLine,
    SchemaMappingError,
    StructuralError,
    UnresolvedReference,
)

__all__ = [
    "ConversionError",
    "DuplicateReference",
    "MalformedLine",
    "SchemaMappingError",
    "StructuralError",
    "UnresolvedReference",
]
