"""Per-source result that keeps the last good value across failures."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class HistoryState(enum.Enum):
    OK = "ok"
    ERROR = "error"
    ERROR_WITH_HISTORY = "error-with-history"


@dataclass(frozen=True)
class ResultWithHistory(Generic[T]):
    """Ok(value) | Error | ErrorWithHistory(last good value).

    A failure never throws away a value that was seen before; it only turns
    Ok into ErrorWithHistory.
    """

    state: HistoryState
    value: tuple[T, ...] = ()

    @classmethod
    def ok(cls, value: tuple[T, ...] | list[T]) -> ResultWithHistory[T]:
        return cls(HistoryState.OK, tuple(value))

    @classmethod
    def error(cls) -> ResultWithHistory[T]:
        return cls(HistoryState.ERROR)

    def with_success(self, value: tuple[T, ...] | list[T]) -> ResultWithHistory[T]:
        return ResultWithHistory.ok(value)

    def with_failure(self) -> ResultWithHistory[T]:
        if self.state is HistoryState.OK:
            return ResultWithHistory(HistoryState.ERROR_WITH_HISTORY, self.value)
        return self

    @property
    def has_value(self) -> bool:
        return self.state is not HistoryState.ERROR

    @property
    def has_error(self) -> bool:
        return self.state is not HistoryState.OK

    @property
    def count(self) -> int:
        return len(self.value) if self.has_value else 0
