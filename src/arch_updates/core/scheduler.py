"""Periodic polling of the three update sources.

Every tick runs either the online or the offline check of all sources
concurrently. Every `online_check_period`th tick (starting with the first) is
online; the rest reuse the caches from each source's last successful online
check. A source without a cache sits out offline ticks.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Iterable, Union

from arch_updates.config.settings import Settings, settings as default_settings
from arch_updates.core.errors import UpdateCheckError
from arch_updates.core.timeout import with_timeout
from arch_updates.core.update_checker import UpdateChecker
from arch_updates.core.updates_state import SourceResult, UpdatesState
from arch_updates.models import CheckType, UpdateType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdatesMessage:
    """Full state snapshot, sent whenever any part of it changes."""

    state: UpdatesState
    source: UpdateType | None = None
    check_type: CheckType | None = None


@dataclass(frozen=True)
class SourceErrorMessage:
    source: UpdateType
    error: str


Message = Union[UpdatesMessage, SourceErrorMessage]


def format_source_error(source: UpdateType, error: BaseException) -> str:
    return f"ERROR - {source.label} updates: {error}"


class UpdatesScheduler:
    """Owns the update state and the per-source caches."""

    def __init__(self, checker: UpdateChecker | None = None, config: Settings | None = None):
        self.config = config or default_settings
        if self.config.online_check_period < 1:
            raise ValueError("online_check_period must be at least 1")
        self.checker = checker or UpdateChecker(lock_file=self.config.lock_file)
        self.counter = 0
        self.state = UpdatesState()
        # Absent key: no successful online check to reuse.
        self.caches: dict[UpdateType, Any] = {}
        self._refresh = asyncio.Event()
        self._queue: asyncio.Queue[Message] = asyncio.Queue(maxsize=self.config.message_buffer)

    # -- interface for the UI -------------------------------------------------

    def request_refresh(self) -> None:
        """Ask for an out-of-cycle online check. Repeated requests coalesce."""
        self._refresh.set()

    async def messages(self) -> AsyncIterator[Message]:
        while True:
            yield await self._queue.get()

    def total_due(self, exclude_from_count: Iterable[UpdateType] | None = None) -> int:
        if exclude_from_count is None:
            exclude_from_count = self.config.exclude_from_counter
        return self.state.total_filtered(exclude_from_count)

    # -- loop -----------------------------------------------------------------

    async def run(self) -> None:
        """Tick forever at `interval_secs`, servicing refresh requests in between."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            if not self._refresh.is_set():
                delay = next_tick - loop.time()
                if delay > 0:
                    try:
                        await asyncio.wait_for(self._refresh.wait(), timeout=delay)
                    except asyncio.TimeoutError:
                        pass
            if self._refresh.is_set():
                self._refresh.clear()
                await self.refresh()
                # The refresh stands in for the tick that was due.
                next_tick = loop.time() + self.config.interval_secs
                continue
            await self.tick()
            # Ticks missed while checks ran are not made up.
            next_tick = max(next_tick + self.config.interval_secs, loop.time())

    def next_check_type(self) -> CheckType:
        if self.counter % self.config.online_check_period == 0:
            return CheckType.ONLINE
        return CheckType.OFFLINE

    async def tick(self) -> CheckType:
        check_type = self.next_check_type()
        self.counter += 1
        await self.run_checks(check_type)
        return check_type

    async def refresh(self) -> None:
        """Online check now; the following regular tick is online too."""
        self.counter = 0
        self.state = self.state.set_refreshing()
        await self._emit(UpdatesMessage(self.state))
        await self.run_checks(CheckType.ONLINE)

    async def run_checks(self, check_type: CheckType) -> None:
        """Run all sources concurrently, folding in each result as it arrives."""
        if check_type is CheckType.ONLINE:
            jobs = self._online_jobs()
        else:
            jobs = self._offline_jobs()
        if not jobs:
            logger.debug("No offline caches yet, skipping tick")
            return

        tasks = [
            asyncio.ensure_future(self._run_source(source, check_type, job))
            for source, job in jobs.items()
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                result, cache = await next_done
                await self._handle_result(result, cache)
        finally:
            for task in tasks:
                task.cancel()

    def _online_jobs(self) -> dict[UpdateType, Awaitable[Any]]:
        return {
            UpdateType.PACMAN: self.checker.pacman_online(),
            UpdateType.AUR: self.checker.aur_online(),
            UpdateType.DEVEL: self.checker.devel_online(),
        }

    def _offline_jobs(self) -> dict[UpdateType, Awaitable[Any]]:
        offline = {
            UpdateType.PACMAN: self.checker.pacman_offline,
            UpdateType.AUR: self.checker.aur_offline,
            UpdateType.DEVEL: self.checker.devel_offline,
        }
        return {
            source: check(self.caches[source])
            for source, check in offline.items()
            if source in self.caches
        }

    async def _run_source(
        self, source: UpdateType, check_type: CheckType, job: Awaitable[Any]
    ) -> tuple[SourceResult, Any]:
        try:
            out = await with_timeout(job, self.config.timeout)
        except UpdateCheckError as e:
            logger.debug("%s %s check failed", source.value, check_type.value, exc_info=True)
            return SourceResult(source, check_type, error=format_source_error(source, e)), None
        except Exception as e:
            logger.exception("Unexpected error in %s %s check", source.value, check_type.value)
            return SourceResult(source, check_type, error=format_source_error(source, e)), None

        if check_type is CheckType.ONLINE:
            updates, cache = out
        else:
            updates, cache = out, None
        return SourceResult(source, check_type, updates=tuple(updates)), cache

    async def _handle_result(self, result: SourceResult, cache: Any) -> None:
        if result.check_type is CheckType.ONLINE:
            if result.ok:
                self.caches[result.source] = cache
            else:
                # Never fall back to an older cache.
                self.caches.pop(result.source, None)
        self.state = self.state.apply(result)
        if not result.ok:
            await self._emit(SourceErrorMessage(result.source, result.error or ""))
        await self._emit(UpdatesMessage(self.state, result.source, result.check_type))

    async def _emit(self, message: Message) -> None:
        await self._queue.put(message)

    async def aclose(self) -> None:
        await self.checker.aclose()
