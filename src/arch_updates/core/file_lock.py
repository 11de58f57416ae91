"""Cross-process advisory lock backed by a file.

Advisory locks only coordinate programs that opt in to them. This is used to
stop several instances of this application from running `checkupdates` in
sync mode at the same time; it does not prevent anyone else from doing so.
"""

from __future__ import annotations

import asyncio
import fcntl
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from arch_updates.core.errors import LockError

logger = logging.getLogger(__name__)


def _open_lock_file(path: Path) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    return os.open(path, os.O_RDWR | os.O_CREAT, 0o644)


@asynccontextmanager
async def exclusive_lock(path: Path) -> AsyncIterator[None]:
    """Hold an exclusive flock on `path` for the duration of the block.

    Acquisition blocks in a worker thread so the event loop keeps running.
    The lock is released when the block exits for any reason; if the
    process dies the kernel drops it.
    """
    loop = asyncio.get_running_loop()
    try:
        fd = _open_lock_file(path)
    except OSError as e:
        raise LockError(f"Unable to open lock file {path}: {e}") from e

    acquire = loop.run_in_executor(None, fcntl.flock, fd, fcntl.LOCK_EX)
    try:
        await asyncio.shield(acquire)
    except asyncio.CancelledError:
        # The worker thread may still get the lock after we stop waiting;
        # closing the descriptor once it returns releases it.
        acquire.add_done_callback(lambda _: os.close(fd))
        raise
    except OSError as e:
        os.close(fd)
        raise LockError(f"Unable to lock {path}: {e}") from e

    logger.debug("Acquired lock %s", path)
    try:
        yield
    finally:
        # Closing the last descriptor drops the flock.
        os.close(fd)
        logger.debug("Released lock %s", path)
