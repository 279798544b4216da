from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedcom_relation.cli.utils import load_gedcom, print_findings

console = Console()

STAT_ROWS = (
    ("Lines", "lines"),
    ("Records", "records"),
    ("Depth", "depth"),
    ("References", "references"),
    ("Individuals", "individuals"),
    ("Families", "families"),
    ("Facts", "facts"),
    ("Findings", "findings"),
)


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="List every finding",
    ),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    result = load_gedcom(gedcom, verbose=verbose)

    table = Table(title=f"GEDCOM Statistics: {gedcom.name}")
    table.add_column("Item", style="bold")
    table.add_column("Count", justify="right")

    for label, key in STAT_ROWS:
        table.add_row(label, str(result.stats.get(key, 0)))

    console.print(table)

    if verbose:
        print_findings(result.findings)
