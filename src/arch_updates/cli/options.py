"""Shared CLI options."""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from rich.logging import RichHandler

from arch_updates.models import UpdateType

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
ExcludeOption = typer.Option(
    None, "--exclude", "-x", help="Source to leave out of the total count (pacman, aur, devel)"
)
TimeoutOption = typer.Option(None, "--timeout", help="Seconds before a source check is abandoned")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr")


def parse_exclude(values: Optional[List[str]]) -> set[UpdateType]:
    try:
        return {UpdateType.from_str(v) for v in values or []}
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
