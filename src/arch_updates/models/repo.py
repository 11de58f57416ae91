"""Sync repository models."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class Repo(enum.Enum):
    """Official repositories, plus packages not in any sync database.

    See https://wiki.archlinux.org/title/Official_repositories
    """

    CORE = "core"
    EXTRA = "extra"
    MULTILIB = "multilib"
    CORE_TESTING = "core-testing"
    EXTRA_TESTING = "extra-testing"
    MULTILIB_TESTING = "multilib-testing"
    GNOME_UNSTABLE = "gnome-unstable"
    KDE_UNSTABLE = "kde-unstable"
    # Manually installed PKGBUILDs, or AUR PKGBUILDs.
    FOREIGN = "foreign"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OtherRepo:
    """Unofficial user repository, e.g. endeavouros or chaotic-aur."""

    name: str

    def __str__(self) -> str:
        return self.name


SourceRepo = Union[Repo, OtherRepo]

# Only repos that show up in `pacman -Sl` output; "foreign" never does.
_SYNC_REPOS: dict[str, Repo] = {r.value: r for r in Repo if r is not Repo.FOREIGN}


def source_repo_from_text(text: str) -> SourceRepo:
    """Map a repo name from pacman output to a SourceRepo."""
    repo = _SYNC_REPOS.get(text)
    if repo is not None:
        return repo
    return OtherRepo(text)
