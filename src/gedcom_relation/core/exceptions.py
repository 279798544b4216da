"""
Error taxonomy for the conversion pipeline.

Every failure that aborts a document derives from ``ConversionError``.
The pipeline stamps ``source`` (the document name) on the error before
re-raising so batch callers can report which document failed and where.
"""

from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base exception for per-document conversion failures."""

    def __init__(self, message: str, *, lineno: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.source: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.source}: " if self.source else ""
        return f"{prefix}{self.message}"


class MalformedLine(ConversionError):
    """Raised when a line does not match the level/xref/tag/value grammar."""

    def __init__(self, lineno: int, text: str, reason: str = "malformed line") -> None:
        super().__init__(f"Line {lineno}: {reason} -> {text!r}", lineno=lineno)
        self.text = text
        self.reason = reason


class StructuralError(ConversionError):
    """Raised when the level hierarchy cannot be assembled."""


class DuplicateReference(ConversionError):
    """Raised when two records declare the same cross-reference id."""

    def __init__(self, xref_id: str, lineno: Optional[int] = None) -> None:
        where = f"Line {lineno}: " if lineno else ""
        super().__init__(
            f"{where}duplicate cross-reference declaration @{xref_id}@",
            lineno=lineno,
        )
        self.xref_id = xref_id


class UnresolvedReference(ConversionError):
    """Raised when a pointer value names an id that was never declared."""

    def __init__(
        self,
        xref_id: str,
        lineno: Optional[int] = None,
        reason: str = "unresolved cross-reference",
    ) -> None:
        where = f"Line {lineno}: " if lineno else ""
        super().__init__(f"{where}{reason} @{xref_id}@", lineno=lineno)
        self.xref_id = xref_id


class SchemaMappingError(ConversionError):
    """Reserved for a strict mapping mode; the current mapper never raises it."""
