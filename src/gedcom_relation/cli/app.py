from __future__ import annotations

import typer

from gedcom_relation.cli.commands.convert import convert_command, convert_file_command
from gedcom_relation.cli.commands.stats import stats_command

app = typer.Typer(
    name="gedcom-relation",
    help="Convert GEDCOM family trees to relationship-schema JSON",
    add_completion=False,
)

app.command("convert")(convert_command)
app.command("convert-file")(convert_file_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
