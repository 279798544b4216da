from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from gedcom_relation.config import get_config, use_config
from gedcom_relation.core.context import ConversionResult
from gedcom_relation.core.exceptions import ConversionError
from gedcom_relation.core.pipeline import convert_text
from gedcom_relation.exporter import serialize_document
from gedcom_relation.loader import read_document
from gedcom_relation.logging import set_debug
from gedcom_relation.registry import Finding

console = Console()
err_console = Console(stderr=True)

PRETTY_INDENT = 2


def apply_options(config_path: Optional[Path] = None, verbose: bool = False) -> None:
    """Load an explicit config file and switch on debug logging when asked."""
    if config_path is not None:
        use_config(config_path)
    if verbose or get_config().debug:
        set_debug(True)


def resolve_indent(pretty: bool) -> Optional[int]:
    if pretty:
        return PRETTY_INDENT
    return get_config().pipeline.get("indent")


def load_gedcom(path: Path, *, verbose: bool = False) -> ConversionResult:
    """
    Run the full conversion for one file, exiting with status 1 on abort.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()
    try:
        result = convert_text(read_document(path), source=str(path))
    except ConversionError as exc:
        print_error(exc)
        raise typer.Exit(code=1)

    elapsed = time.perf_counter() - t0
    if verbose:
        console.log(f"Converted {path.name} in {elapsed:.2f}s")

    return result


def write_json(document, *, out: Optional[Path], pretty: bool) -> None:
    """
    Write JSON to stdout or file.
    """
    payload = serialize_document(document, indent=resolve_indent(pretty))

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)


def print_findings(findings: Iterable[Finding], source: Optional[str] = None) -> None:
    prefix = f"{source}: " if source else ""
    for finding in findings:
        err_console.print(f"[yellow]warning[/yellow] {escape(prefix + str(finding))}")


def print_error(exc: BaseException) -> None:
    err_console.print(f"[bold red]error[/bold red] {escape(str(exc))}")
