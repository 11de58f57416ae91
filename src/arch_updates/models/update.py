"""Per-source update records and offline caches."""

from __future__ import annotations

from dataclasses import dataclass, field

from arch_updates.models.repo import SourceRepo


@dataclass(frozen=True)
class PacmanUpdate:
    pkgname: str
    pkgver_cur: str
    pkgrel_cur: str
    pkgver_new: str
    pkgrel_new: str
    source_repo: SourceRepo | None = None

    @property
    def version_change(self) -> str:
        return f"{self.pkgver_cur}-{self.pkgrel_cur} -> {self.pkgver_new}-{self.pkgrel_new}"


@dataclass(frozen=True)
class AurUpdate:
    pkgname: str
    pkgver_cur: str
    pkgrel_cur: str
    pkgver_new: str
    pkgrel_new: str

    @property
    def version_change(self) -> str:
        return f"{self.pkgver_cur}-{self.pkgrel_cur} -> {self.pkgver_new}-{self.pkgrel_new}"


@dataclass(frozen=True)
class DevelUpdate:
    """Installed devel package vs the latest ref on its source repo.

    Devel packages don't get a new pkgver/pkgrel from upstream, only the
    short commit hash of the remote branch.
    """

    pkgname: str
    pkgver_cur: str
    pkgrel_cur: str
    ref_id_new: str

    @property
    def version_change(self) -> str:
        return f"{self.pkgver_cur}-{self.pkgrel_cur} -> {self.ref_id_new}"


@dataclass(frozen=True)
class ParsedUpdate:
    """A `checkupdates` line before the source repo is attached."""

    pkgname: str
    pkgver_cur: str
    pkgrel_cur: str
    pkgver_new: str
    pkgrel_new: str


@dataclass(frozen=True)
class PacmanUpdatesCache:
    # pkgname -> repo it is synced from
    sources: dict[str, SourceRepo] = field(default_factory=dict)


@dataclass(frozen=True)
class AurUpdatesCache:
    # Every package returned by the AUR, due or not
    packages: tuple[AurUpdate, ...] = ()


@dataclass(frozen=True)
class DevelUpdatesCache:
    # One record per parseable source URL, due or not
    packages: tuple[DevelUpdate, ...] = ()
