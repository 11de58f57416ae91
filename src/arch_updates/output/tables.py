"""Rich table builders for update listings."""

from __future__ import annotations

from rich.table import Table

from arch_updates.core.repo_resolver import package_url
from arch_updates.core.updates_state import UpdatesState
from arch_updates.models import UpdateType
from arch_updates.models.update import PacmanUpdate
from arch_updates.output.themes import styled_history, styled_source


def updates_table(state: UpdatesState, source: UpdateType) -> Table:
    history = state.get(source)
    title = f"{source.label} updates ({history.count if history else 0})"
    table = Table(title=title, expand=True)
    table.add_column("Package", style="bold white", no_wrap=True)
    table.add_column("Change")
    table.add_column("Repo", style="dim", no_wrap=True)
    table.add_column("URL", style="dim", overflow="fold")

    if history is None or not history.has_value:
        return table

    for u in history.value:
        repo = u.source_repo if isinstance(u, PacmanUpdate) else None
        table.add_row(
            u.pkgname,
            u.version_change,
            str(repo) if repo is not None else "-",
            package_url(u.pkgname, source, repo) or "-",
        )
    return table


def summary_table(state: UpdatesState, exclude: set[UpdateType]) -> Table:
    table = Table(title="Update Summary", show_lines=False)
    table.add_column("Source", no_wrap=True)
    table.add_column("Due", justify="right")
    table.add_column("Status", no_wrap=True)
    table.add_column("Counted", style="dim")

    for source in UpdateType:
        table.add_row(
            styled_source(source),
            str(state.count(source)),
            styled_history(state.get(source)),
            "no" if source in exclude else "yes",
        )
    return table
