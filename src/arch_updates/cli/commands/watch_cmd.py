"""arch-updates watch - Poll for updates and print every change."""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import signal
from typing import List, Optional

import typer
from rich.console import Console

from arch_updates.cli.options import (
    ExcludeOption,
    TimeoutOption,
    VerboseOption,
    configure_logging,
    parse_exclude,
)
from arch_updates.config.settings import settings
from arch_updates.core.scheduler import SourceErrorMessage, UpdatesMessage, UpdatesScheduler
from arch_updates.models import UpdateType
from arch_updates.output.themes import styled_source

app = typer.Typer()
console = Console()


def _print_message(message: UpdatesMessage | SourceErrorMessage, excluded: set[UpdateType]) -> None:
    if isinstance(message, SourceErrorMessage):
        console.print(f"[red]{message.error}[/red]")
        return
    state = message.state
    if state.refreshing and message.source is None:
        console.print("[dim]Refreshing…[/dim]")
        return
    counts = "  ".join(f"{styled_source(s)} {state.count(s)}" for s in UpdateType)
    checked = state.last_checked_online.strftime("%H:%M:%S") if state.last_checked_online else "never"
    stale = " [yellow](stale)[/yellow]" if state.has_errors() else ""
    console.print(
        f"[bold]{state.total_filtered(excluded)}[/bold] due  {counts}  "
        f"[dim]last online check {checked}[/dim]{stale}"
    )


async def _watch(scheduler: UpdatesScheduler, excluded: set[UpdateType]) -> None:
    loop = asyncio.get_running_loop()
    # SIGUSR1 forces an online check, like the refresh button of a status applet.
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGUSR1, scheduler.request_refresh)

    runner = asyncio.ensure_future(scheduler.run())
    try:
        async for message in scheduler.messages():
            _print_message(message, excluded)
    finally:
        runner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await runner
        await scheduler.aclose()


@app.callback(invoke_without_command=True)
def watch(
    interval: Optional[int] = typer.Option(None, "--interval", help="Seconds between checks"),
    online_check_period: Optional[int] = typer.Option(
        None, "--online-check-period", help="Check online every N intervals"
    ),
    exclude: Optional[List[str]] = ExcludeOption,
    timeout: Optional[int] = TimeoutOption,
    verbose: bool = VerboseOption,
) -> None:
    """Keep checking for updates until interrupted. Send SIGUSR1 to force a refresh."""
    configure_logging(verbose)
    excluded = parse_exclude(exclude) or settings.exclude_from_counter

    config = dataclasses.replace(settings)
    if interval is not None:
        config.interval_secs = interval
    if online_check_period is not None:
        config.online_check_period = online_check_period
    if timeout is not None:
        config.timeout_secs = timeout

    async def main() -> None:
        await _watch(UpdatesScheduler(config=config), excluded)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
