"""Long-lived update state owned by the scheduler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Iterable

from arch_updates.core.history import ResultWithHistory
from arch_updates.models import CheckType, UpdateType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceResult:
    """Outcome of one source check in one cycle: updates, or an error message."""

    source: UpdateType
    check_type: CheckType
    updates: tuple[Any, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def apply_result(
    prev: ResultWithHistory | None, result: SourceResult | None
) -> ResultWithHistory | None:
    """Fold a new check result into a source's history.

    No result (an offline check skipped for lack of a cache) leaves the
    history untouched.
    """
    if result is None:
        return prev
    if result.ok:
        return ResultWithHistory.ok(result.updates)
    if prev is None:
        return ResultWithHistory.error()
    return prev.with_failure()


@dataclass(frozen=True)
class UpdatesState:
    """Snapshot of every source's updates. A source is None until its first result."""

    pacman: ResultWithHistory | None = None
    aur: ResultWithHistory | None = None
    devel: ResultWithHistory | None = None
    last_checked_online: datetime | None = None
    refreshing: bool = True

    def get(self, source: UpdateType) -> ResultWithHistory | None:
        return getattr(self, source.value)

    def apply(self, result: SourceResult, when: datetime | None = None) -> UpdatesState:
        """Return a new state with `result` folded into its source."""
        if not result.ok:
            logger.warning("%s", result.error)
        changes: dict[str, Any] = {
            result.source.value: apply_result(self.get(result.source), result),
        }
        if result.check_type is CheckType.ONLINE:
            changes["last_checked_online"] = when or datetime.now().astimezone()
            changes["refreshing"] = False
        return replace(self, **changes)

    def set_refreshing(self) -> UpdatesState:
        return replace(self, refreshing=True)

    def count(self, source: UpdateType) -> int:
        history = self.get(source)
        return history.count if history is not None else 0

    def total_filtered(self, exclude_from_count: Iterable[UpdateType] = ()) -> int:
        """Total due updates, leaving out the given sources."""
        excluded = set(exclude_from_count)
        return sum(self.count(s) for s in UpdateType if s not in excluded)

    def has_errors(self) -> bool:
        return any(
            history is not None and history.has_error
            for history in (self.pacman, self.aur, self.devel)
        )
