"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from arch_updates.core.history import ResultWithHistory
from arch_updates.core.updates_state import UpdatesState
from arch_updates.models import UpdateType
from arch_updates.models.update import PacmanUpdate

console = Console()


def _update_to_dict(u: Any) -> dict[str, Any]:
    data = {
        "name": u.pkgname,
        "current_version": f"{u.pkgver_cur}-{u.pkgrel_cur}",
    }
    if hasattr(u, "ref_id_new"):
        data["latest_ref"] = u.ref_id_new
    else:
        data["latest_version"] = f"{u.pkgver_new}-{u.pkgrel_new}"
    if isinstance(u, PacmanUpdate):
        data["repo"] = str(u.source_repo) if u.source_repo is not None else None
    return data


def _history_to_dict(history: ResultWithHistory | None) -> dict[str, Any]:
    if history is None:
        return {"status": "pending", "updates": []}
    return {
        "status": history.state.value,
        "updates": [_update_to_dict(u) for u in history.value] if history.has_value else [],
    }


def state_to_dict(state: UpdatesState, exclude: set[UpdateType]) -> dict[str, Any]:
    data: dict[str, Any] = {
        "last_checked_online": state.last_checked_online.isoformat() if state.last_checked_online else None,
        "total": state.total_filtered(exclude),
        "has_errors": state.has_errors(),
    }
    for source in UpdateType:
        data[source.value] = _history_to_dict(state.get(source))
    return data


def output_state(state: UpdatesState, fmt: str, exclude: set[UpdateType]) -> None:
    if fmt == "json":
        console.print_json(json.dumps(state_to_dict(state, exclude), indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump(state_to_dict(state, exclude), default_flow_style=False, sort_keys=False))
    else:
        from arch_updates.output.tables import summary_table, updates_table
        for source in UpdateType:
            console.print(updates_table(state, source))
        console.print(summary_table(state, exclude))
