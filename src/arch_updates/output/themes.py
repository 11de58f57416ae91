"""Source and history state color maps."""

from arch_updates.core.history import HistoryState, ResultWithHistory
from arch_updates.models import UpdateType

SOURCE_COLORS: dict[UpdateType, str] = {
    UpdateType.PACMAN: "cyan",
    UpdateType.AUR: "magenta",
    UpdateType.DEVEL: "blue",
}

HISTORY_COLORS: dict[HistoryState, str] = {
    HistoryState.OK: "green",
    HistoryState.ERROR: "red bold",
    HistoryState.ERROR_WITH_HISTORY: "yellow",
}


def styled_source(source: UpdateType) -> str:
    color = SOURCE_COLORS.get(source, "white")
    return f"[{color}]{source.label}[/{color}]"


def styled_history(history: ResultWithHistory | None) -> str:
    if history is None:
        return "[dim]pending[/dim]"
    color = HISTORY_COLORS.get(history.state, "white")
    return f"[{color}]{history.state.value}[/{color}]"
