"""arch-updates check - One online check of every source."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import List, Optional

import typer
from rich.console import Console

from arch_updates.cli.options import (
    ExcludeOption,
    OutputOption,
    TimeoutOption,
    VerboseOption,
    configure_logging,
    parse_exclude,
)
from arch_updates.config.settings import settings
from arch_updates.core.scheduler import UpdatesScheduler
from arch_updates.core.updates_state import UpdatesState
from arch_updates.models import CheckType
from arch_updates.output.formatters import output_state

app = typer.Typer()
console = Console(stderr=True)


async def _check_once(timeout: Optional[int]) -> UpdatesState:
    config = dataclasses.replace(settings, message_buffer=0)
    if timeout is not None:
        config.timeout_secs = timeout
    scheduler = UpdatesScheduler(config=config)
    try:
        await scheduler.run_checks(CheckType.ONLINE)
    finally:
        await scheduler.aclose()
    return scheduler.state


@app.callback(invoke_without_command=True)
def check(
    output: str = OutputOption,
    exclude: Optional[List[str]] = ExcludeOption,
    timeout: Optional[int] = TimeoutOption,
    verbose: bool = VerboseOption,
) -> None:
    """Check pacman, AUR and devel packages for updates."""
    configure_logging(verbose)
    excluded = parse_exclude(exclude) or settings.exclude_from_counter

    with console.status("[bold cyan]Checking for updates…"):
        state = asyncio.run(_check_once(timeout))

    output_state(state, output, excluded)

    if output == "table":
        total = state.total_filtered(excluded)
        if state.has_errors():
            console.print("[red]Some sources could not be checked, see above[/red]")
        if total:
            console.print(f"\n[yellow]{total} update(s) available[/yellow]")
        else:
            console.print("\n[green]Everything is up to date[/green]")
