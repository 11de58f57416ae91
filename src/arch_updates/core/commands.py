"""Async wrapper for running external commands."""

from __future__ import annotations

import asyncio
import logging

from arch_updates.core.errors import CommandError

logger = logging.getLogger(__name__)


async def run_command(*args: str, ok_codes: tuple[int, ...] = (0,)) -> str:
    """Run a command and return its stdout decoded as UTF-8.

    Raises CommandError if the binary can't be started, its output isn't
    valid UTF-8, or it exits with a code outside ok_codes.
    """
    logger.debug("Running %s", " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandError(args, str(e)) from e

    stdout, stderr = await proc.communicate()
    if proc.returncode not in ok_codes:
        message = stderr.decode("utf-8", errors="replace").strip() or f"exit code {proc.returncode}"
        raise CommandError(args, message, returncode=proc.returncode)
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CommandError(args, "Error parsing stdout from command") from e
