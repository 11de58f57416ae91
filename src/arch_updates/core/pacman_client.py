"""pacman / pacman-conf / checkupdates wrapper."""

from __future__ import annotations

import asyncio
import enum
import logging

from arch_updates.config.settings import settings
from arch_updates.core.commands import run_command
from arch_updates.models import Package
from arch_updates.models.update import ParsedUpdate
from arch_updates.utils.output_parser import parse_foreign_line, parse_update_line

logger = logging.getLogger(__name__)


class CheckupdatesMode(enum.Enum):
    # Refresh a temporary copy of the sync db first. Only one process on the
    # system may do this at a time.
    SYNC = "sync"
    NO_SYNC = "nosync"


class PacmanClient:
    """Thin wrapper around the pacman command line tools."""

    def __init__(self, devel_suffixes: tuple[str, ...] | None = None):
        self.devel_suffixes = devel_suffixes if devel_suffixes is not None else settings.devel_suffixes

    async def checkupdates(self, mode: CheckupdatesMode) -> list[ParsedUpdate]:
        """List pending sync updates."""
        args = ["checkupdates"]
        if mode is CheckupdatesMode.NO_SYNC:
            args.append("--nosync")
        logger.debug("Listing pending updates (%s)", mode.value)
        # checkupdates exits 2 when there is nothing to update
        out = await run_command(*args, ok_codes=(0, 2))
        return [parse_update_line(line) for line in out.splitlines() if line.strip()]

    async def sync_listing(self) -> str:
        """Raw `pacman -Sl` output: `{repo} {pkgname} {pkgver}-{pkgrel} [installed]`."""
        return await run_command("pacman", "-Sl")

    async def ignored_packages(self) -> list[str]:
        """Names pacman.conf tells pacman to ignore."""
        out = await run_command("pacman-conf", "IgnorePkg")
        return [line.strip() for line in out.splitlines() if line.strip()]

    async def foreign_packages(self) -> list[Package]:
        """Installed packages that aren't in any sync db, minus ignored ones.

        These are treated as the AUR packages on the system.
        """
        ignored, out = await asyncio.gather(
            self.ignored_packages(),
            # pacman exits 1 when no foreign packages are installed
            run_command("pacman", "-Qm", ok_codes=(0, 1)),
        )
        ignored_set = set(ignored)
        packages = [parse_foreign_line(line) for line in out.splitlines() if line.strip()]
        return [p for p in packages if p.pkgname not in ignored_set]

    async def devel_packages(self) -> list[Package]:
        """Foreign packages whose name ends with a devel suffix."""
        return [p for p in await self.foreign_packages() if self.is_devel(p.pkgname)]

    def is_devel(self, pkgname: str) -> bool:
        name = pkgname.lower()
        return any(name.endswith(suffix) for suffix in self.devel_suffixes)
