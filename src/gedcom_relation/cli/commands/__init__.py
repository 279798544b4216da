"""
CLI command modules for gedcom_relation.

Each command module defines Typer-compatible command functions.
"""

from gedcom_relation.cli.commands.convert import convert_command, convert_file_command
from gedcom_relation.cli.commands.stats import stats_command

__all__ = [
    "convert_command",
    "convert_file_command",
    "stats_command",
]
