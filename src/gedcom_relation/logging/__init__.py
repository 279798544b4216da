"""
Logging package for ``gedcom_relation``.

Use ``get_logger(__name__)`` in modules to inherit the shared console and
master-file handlers.
"""

from .logger import get_logger, set_debug

__all__ = [
    "get_logger",
    "set_debug",
]
