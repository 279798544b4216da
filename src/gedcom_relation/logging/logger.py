"""
Centralized logging configuration for gedcom-relation.

Key behaviors
-------------
* Single entry point via ``get_logger`` to keep handlers/formatters consistent.
* Master log file (default: ``logs/gedcom_relation.log``) when
  ``logging.to_file`` is enabled.
* Console logging through ``rich`` that respects the configured debug flag.
* Optional log rotation controlled by ``config/gedcom_relation.yml``.
"""

from __future__ import annotations

import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from gedcom_relation.config import get_config
from gedcom_relation.utils.pathing import project_root

# -----------------------------------------------------------------------------
# Paths and configuration
# -----------------------------------------------------------------------------

PROJECT_ROOT = project_root()
BASE_LOGGER_NAME = "gedcom_relation"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_base_configured: bool = False
_effective_level: int = logging.INFO


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _ensure_log_dir() -> Path:
    """Resolve and create the log directory from configuration."""
    cfg = get_config()

    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _build_file_handler(path: Path, level: int, rotate: bool) -> logging.Handler:
    """Create a file handler with optional rotation."""
    if rotate:
        handler: logging.Handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configure_base_logger() -> Logger:
    """Configure the shared base logger once."""
    global _base_configured, _effective_level

    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if _base_configured:
        return base_logger

    cfg = get_config()
    level_name = str(cfg.logging.get("level", "INFO")).upper()
    base_level = getattr(logging, level_name, logging.INFO)
    debug_enabled = bool(getattr(cfg, "debug", False))

    _effective_level = logging.DEBUG if debug_enabled else base_level

    base_logger.setLevel(_effective_level)
    base_logger.propagate = False

    if cfg.logging.get("to_file", True):
        master_path = _ensure_log_dir() / cfg.logging.get("file", "gedcom_relation.log")
        base_logger.addHandler(
            _build_file_handler(
                master_path,
                _effective_level,
                bool(cfg.logging.get("rotate", False)),
            )
        )

    console = RichHandler(show_path=False, rich_tracebacks=False)
    console.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    console.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    base_logger.addHandler(console)

    _base_configured = True
    return base_logger


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def get_logger(name: str | None = None) -> Logger:
    """Return a logger configured with project-wide handlers.

    Module loggers are children of the ``gedcom_relation`` base logger and
    inherit its console + master log handlers. Short names such as
    ``"pipeline"`` are placed under the base namespace.
    """
    base_logger = _configure_base_logger()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    logger = logging.getLogger(logger_name)
    if logger is not base_logger:
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    return logger


def set_debug(enabled: bool = True) -> None:
    """Switch the base logger and its console handler to DEBUG at runtime."""
    global _effective_level
    base_logger = _configure_base_logger()
    level = logging.DEBUG if enabled else logging.INFO
    _effective_level = level
    base_logger.setLevel(level)
    for handler in base_logger.handlers:
        handler.setLevel(level)
