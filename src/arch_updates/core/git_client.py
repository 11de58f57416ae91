"""git remote queries."""

from __future__ import annotations

import logging

from arch_updates.core.commands import run_command
from arch_updates.core.errors import HeadIdentifierError

logger = logging.getLogger(__name__)

SHORT_HASH_LEN = 7


async def get_head_identifier(url: str, branch: str | None = None) -> str:
    """Return the first 7 characters of the commit a remote branch points at.

    HEAD is used when no branch is given.
    """
    out = await run_command("git", "ls-remote", url, branch or "HEAD")
    ref_id = out[:SHORT_HASH_LEN]
    if len(ref_id) < SHORT_HASH_LEN:
        raise HeadIdentifierError(f"{url} {branch or 'HEAD'}")
    logger.debug("%s %s is at %s", url, branch or "HEAD", ref_id)
    return ref_id
