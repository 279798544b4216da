from __future__ import annotations

from .resolver import ResolvedGraph, XrefRegistry, build_xref_registry, resolve_references

__all__ = [
    "ResolvedGraph",
    "XrefRegistry",
    "build_xref_registry",
    "resolve_references",
]
