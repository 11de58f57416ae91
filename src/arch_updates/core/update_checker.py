"""Check pacman, AUR and devel packages for available updates.

Every source has an online check, which uses the network and returns a cache
alongside the due updates, and an offline check, which reuses that cache and
only looks at what is installed locally.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

from arch_updates.config.settings import settings
from arch_updates.core.aur_client import AurClient
from arch_updates.core.errors import VersionParseError
from arch_updates.core.file_lock import exclusive_lock
from arch_updates.core.git_client import get_head_identifier
from arch_updates.core.pacman_client import CheckupdatesMode, PacmanClient
from arch_updates.core.repo_resolver import add_sources_to_updates, get_sources_list
from arch_updates.models import Package
from arch_updates.models.update import (
    AurUpdate,
    AurUpdatesCache,
    DevelUpdate,
    DevelUpdatesCache,
    PacmanUpdate,
    PacmanUpdatesCache,
)
from arch_updates.utils.output_parser import parse_srcinfo_sources, parse_ver_and_rel
from arch_updates.utils.source_url import parse_source_url
from arch_updates.utils.version_compare import update_due

logger = logging.getLogger(__name__)

HeadLookup = Callable[[str, "str | None"], Awaitable[str]]


def aur_update_due(update: AurUpdate) -> bool:
    return update_due(update.pkgver_cur, update.pkgrel_cur, update.pkgver_new, update.pkgrel_new)


def devel_update_due(update: DevelUpdate) -> bool:
    """A devel package is due unless its pkgver contains the remote short hash."""
    return update.ref_id_new not in update.pkgver_cur


class UpdateChecker:
    """Online and offline update checks for the three package sources."""

    def __init__(
        self,
        pacman: PacmanClient | None = None,
        aur: AurClient | None = None,
        head_lookup: HeadLookup | None = None,
        lock_file: Path | None = None,
    ):
        self.pacman = pacman or PacmanClient()
        self.aur = aur or AurClient()
        self.head_lookup = head_lookup or get_head_identifier
        self.lock_file = lock_file or settings.lock_file

    # -- pacman ---------------------------------------------------------------

    async def pacman_online(self) -> tuple[list[PacmanUpdate], PacmanUpdatesCache]:
        """Sync a temporary db copy and list pending updates.

        `checkupdates` refuses to run in sync mode concurrently, so this
        holds the cross-process lock while it runs. It will still fail if a
        different program is running checkupdates at the same moment.
        """
        async with exclusive_lock(self.lock_file):
            parsed, sources = await asyncio.gather(
                self.pacman.checkupdates(CheckupdatesMode.SYNC),
                get_sources_list(self.pacman),
            )
        return add_sources_to_updates(parsed, sources), PacmanUpdatesCache(sources)

    async def pacman_offline(self, cache: PacmanUpdatesCache) -> list[PacmanUpdate]:
        parsed = await self.pacman.checkupdates(CheckupdatesMode.NO_SYNC)
        return add_sources_to_updates(parsed, cache.sources)

    # -- AUR ------------------------------------------------------------------

    async def aur_online(self) -> tuple[list[AurUpdate], AurUpdatesCache]:
        """Compare installed foreign packages against the AUR.

        Packages the AUR doesn't return are left out of both the result and
        the cache. Packages whose versions can't be ordered are never due.
        """
        installed = await self.pacman.foreign_packages()
        by_name = {p.pkgname: p for p in installed}
        infos = await self.aur.info(list(by_name))

        records: list[AurUpdate] = []
        for info in infos:
            old = by_name.get(info.get("Name", ""))
            if old is None:
                continue
            version = info.get("Version")
            if not isinstance(version, str):
                raise VersionParseError(repr(version))
            pkgver_new, pkgrel_new = parse_ver_and_rel(version)
            records.append(AurUpdate(
                pkgname=old.pkgname,
                pkgver_cur=old.pkgver,
                pkgrel_cur=old.pkgrel,
                pkgver_new=pkgver_new,
                pkgrel_new=pkgrel_new,
            ))

        logger.debug("AUR returned %d of %d foreign packages", len(records), len(installed))
        due = [r for r in records if aur_update_due(r)]
        return due, AurUpdatesCache(tuple(records))

    async def aur_offline(self, cache: AurUpdatesCache) -> list[AurUpdate]:
        installed = await self.pacman.foreign_packages()
        cached = {c.pkgname: c for c in cache.packages}

        updates: list[AurUpdate] = []
        for old in installed:
            latest = cached.get(old.pkgname)
            if latest is not None:
                pkgver_new, pkgrel_new = latest.pkgver_new, latest.pkgrel_new
            else:
                # Nothing known about it; treat installed as latest.
                pkgver_new, pkgrel_new = old.pkgver, old.pkgrel
            updates.append(AurUpdate(
                pkgname=old.pkgname,
                pkgver_cur=old.pkgver,
                pkgrel_cur=old.pkgrel,
                pkgver_new=pkgver_new,
                pkgrel_new=pkgrel_new,
            ))
        return [u for u in updates if aur_update_due(u)]

    # -- devel ----------------------------------------------------------------

    async def devel_online(self) -> tuple[list[DevelUpdate], DevelUpdatesCache]:
        """Compare devel packages against the latest commit of their sources.

        Each parseable git source of a package yields its own record, so a
        package with several sources is reported if any one of them doesn't
        match. This relies on packages following the VCS packaging
        guidelines, putting the short hash in pkgver.
        """
        records: list[DevelUpdate] = []
        for pkg in await self.pacman.devel_packages():
            records.extend(await self._devel_records(pkg))
        due = [r for r in records if devel_update_due(r)]
        return due, DevelUpdatesCache(tuple(records))

    async def _devel_records(self, pkg: Package) -> list[DevelUpdate]:
        srcinfo = await self.aur.get_srcinfo(pkg.pkgname)
        if srcinfo is None:
            logger.debug("%s is not in the AUR, skipping", pkg.pkgname)
            return []

        urls = [u for u in map(parse_source_url, parse_srcinfo_sources(srcinfo)) if u is not None]
        ref_ids = await asyncio.gather(*(self.head_lookup(u.remote, u.branch) for u in urls))
        return [
            DevelUpdate(
                pkgname=pkg.pkgname,
                pkgver_cur=pkg.pkgver,
                pkgrel_cur=pkg.pkgrel,
                ref_id_new=ref_id,
            )
            for ref_id in ref_ids
        ]

    async def devel_offline(self, cache: DevelUpdatesCache) -> list[DevelUpdate]:
        installed = await self.pacman.devel_packages()
        updates = [
            DevelUpdate(
                pkgname=pkg.pkgname,
                pkgver_cur=pkg.pkgver,
                pkgrel_cur=pkg.pkgrel,
                ref_id_new=cached.ref_id_new,
            )
            for pkg in installed
            for cached in cache.packages
            if cached.pkgname == pkg.pkgname
        ]
        return [u for u in updates if devel_update_due(u)]

    async def aclose(self) -> None:
        await self.aur.aclose()

