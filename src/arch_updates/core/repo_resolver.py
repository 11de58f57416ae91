"""Package origin resolution from the pacman sync databases."""

from __future__ import annotations

import logging

from arch_updates.config.settings import settings
from arch_updates.core.pacman_client import PacmanClient
from arch_updates.models import UpdateType
from arch_updates.models.repo import OtherRepo, Repo, SourceRepo, source_repo_from_text
from arch_updates.models.update import PacmanUpdate, ParsedUpdate

logger = logging.getLogger(__name__)


def parse_sources_list(text: str) -> dict[str, SourceRepo]:
    """Build a pkgname -> repo mapping from `pacman -Sl` output.

    Lines look like `{repo} {pkgname} {pkgver}-{pkgrel} [installed]`. Lines
    that don't have at least a repo and a name are ignored.
    """
    sources: dict[str, SourceRepo] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        repo, pkgname = parts[0], parts[1]
        # First listed repo wins, matching pacman's own repo priority.
        sources.setdefault(pkgname, source_repo_from_text(repo))
    return sources


async def get_sources_list(pacman: PacmanClient) -> dict[str, SourceRepo]:
    return parse_sources_list(await pacman.sync_listing())


def resolve_source(pkgname: str, sources: dict[str, SourceRepo]) -> SourceRepo | None:
    """Return the repo a package syncs from, or None if it isn't listed."""
    repo = sources.get(pkgname)
    if repo is None:
        logger.debug("No sync repo found for %s", pkgname)
    return repo


def add_sources_to_updates(
    updates: list[ParsedUpdate], sources: dict[str, SourceRepo]
) -> list[PacmanUpdate]:
    return [
        PacmanUpdate(
            pkgname=u.pkgname,
            pkgver_cur=u.pkgver_cur,
            pkgrel_cur=u.pkgrel_cur,
            pkgver_new=u.pkgver_new,
            pkgrel_new=u.pkgrel_new,
            source_repo=resolve_source(u.pkgname, sources),
        )
        for u in updates
    ]


def package_url(
    pkgname: str,
    update_type: UpdateType,
    source_repo: SourceRepo | None = None,
) -> str | None:
    """Best-effort web page for a package, for display."""
    if update_type in (UpdateType.AUR, UpdateType.DEVEL) or source_repo is Repo.FOREIGN:
        return settings.aur_package_url.format(pkgname=pkgname)
    if isinstance(source_repo, OtherRepo):
        template = settings.other_repo_urls.get(source_repo.name)
        return template.format(pkgname=pkgname) if template else None
    if isinstance(source_repo, Repo):
        return settings.official_package_url.format(
            repo=source_repo.value, arch=settings.arch, pkgname=pkgname
        )
    return None
