"""Time bound for a single source check."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from arch_updates.core.errors import CheckTimeoutError

T = TypeVar("T")


async def with_timeout(aw: Awaitable[T], seconds: float) -> T:
    """Await `aw`, raising CheckTimeoutError if it takes longer than `seconds`.

    The operation's own result or exception is passed through unchanged.
    External processes started by it are not killed, only abandoned.
    """
    try:
        return await asyncio.wait_for(aw, timeout=seconds)
    except asyncio.TimeoutError as e:
        raise CheckTimeoutError(seconds) from e
