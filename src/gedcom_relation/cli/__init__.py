"""
CLI package for gedcom_relation.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom_relation.cli.app import app, main

__all__ = [
    "app",
    "main",
]
