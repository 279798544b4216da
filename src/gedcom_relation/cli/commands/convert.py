from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from gedcom_relation.cli.utils import (
    apply_options,
    load_gedcom,
    print_error,
    print_findings,
    resolve_indent,
    write_json,
)
from gedcom_relation.core.pipeline import convert_directory, output_path_for

console = Console()


def convert_command(
    directory: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory holding .ged files; .json outputs are written beside them",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Parallel documents (default: pipeline.workers from config)",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="YAML configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Convert every GEDCOM file in DIRECTORY to relationship JSON.
    """
    apply_options(config, verbose)

    report = convert_directory(directory, workers=workers, indent=resolve_indent(pretty))

    for outcome in report.outcomes:
        if outcome.ok:
            console.print(
                f"[green]ok[/green]    {escape(outcome.input_path.name)} -> {escape(outcome.output_path.name)}"
            )
            print_findings(outcome.findings, source=outcome.input_path.name)
        else:
            print_error(outcome.error)

    if not report.outcomes:
        console.print(f"No GEDCOM files found in {directory}")

    raise typer.Exit(code=report.exit_code)


def convert_file_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output JSON path (default: next to the input with a .json suffix)",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="YAML configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Convert a single GEDCOM file to relationship JSON.
    """
    apply_options(config, verbose)

    result = load_gedcom(gedcom, verbose=verbose)
    target = out if out is not None else output_path_for(gedcom)

    write_json(result.document, out=target, pretty=pretty)
    print_findings(result.findings, source=gedcom.name)

    if verbose:
        console.log(f"Wrote {target}")
