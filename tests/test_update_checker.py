"""Tests for the online/offline checks of each source."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from arch_updates.core.errors import VersionParseError
from arch_updates.core.pacman_client import CheckupdatesMode
from arch_updates.core.update_checker import UpdateChecker, aur_update_due, devel_update_due
from arch_updates.models import Package
from arch_updates.models.repo import OtherRepo, Repo
from arch_updates.models.update import (
    AurUpdate,
    AurUpdatesCache,
    DevelUpdate,
    DevelUpdatesCache,
    ParsedUpdate,
)

INSTALLED_FOREIGN = [
    Package("watchman-bin", "2024.04.15.00", "1"),
    Package("paru", "2.0.3", "1"),
    Package("hyprlang-git", "0.5.2.r0.gabc1234", "1"),
    Package("local-only", "1.0", "1"),
]

AUR_INFO = [
    {"Name": "watchman-bin", "Version": "2024.04.22.00-1", "PackageBase": "watchman-bin"},
    {"Name": "paru", "Version": "2.0.3-1", "PackageBase": "paru"},
    {"Name": "hyprlang-git", "Version": "0.6.0.r3.gfff0000-1", "PackageBase": "hyprlang-git"},
]

HEADS = {
    ("https://github.com/hyprwm/hyprlang.git", None): "abc1234",
    ("https://example.com/extra.git", "dev"): "fff0000",
}


def _checker(tmp_path, installed=INSTALLED_FOREIGN, srcinfo=None):
    pacman = MagicMock()
    pacman.checkupdates = AsyncMock(return_value=[
        ParsedUpdate("libadwaita", "1:1.6.0", "1", "1:1.6.1", "2"),
        ParsedUpdate("eos-hooks", "1.12", "1", "1.13", "1"),
    ])
    pacman.sync_listing = AsyncMock(return_value=(
        "extra libadwaita 1:1.6.1-2 [installed: 1:1.6.0-1]\n"
        "endeavouros eos-hooks 1.13-1\n"
    ))
    pacman.foreign_packages = AsyncMock(return_value=list(installed))
    pacman.devel_packages = AsyncMock(
        return_value=[p for p in installed if p.pkgname.endswith("-git")]
    )

    aur = MagicMock()
    aur.info = AsyncMock(return_value=AUR_INFO)
    aur.get_srcinfo = AsyncMock(
        side_effect=lambda name: srcinfo if name == "hyprlang-git" else None
    )
    aur.aclose = AsyncMock()

    head_lookup = AsyncMock(side_effect=lambda url, branch: HEADS[(url, branch)])
    return UpdateChecker(
        pacman=pacman, aur=aur, head_lookup=head_lookup, lock_file=tmp_path / "checkupdates.lock"
    )


class TestDueRules:
    def test_aur_due_uses_version_ordering(self, aur_update):
        assert aur_update_due(aur_update)

    def test_devel_due_when_hash_missing(self, devel_update):
        assert devel_update_due(devel_update)

    def test_devel_not_due_when_hash_in_pkgver(self, devel_update):
        matching = DevelUpdate(
            devel_update.pkgname, devel_update.pkgver_cur, devel_update.pkgrel_cur, "72b934e"
        )
        assert not devel_update_due(matching)


class TestPacmanChecks:
    @pytest.mark.asyncio
    async def test_online_attaches_repos(self, tmp_path):
        checker = _checker(tmp_path)
        updates, cache = await checker.pacman_online()

        checker.pacman.checkupdates.assert_awaited_once_with(CheckupdatesMode.SYNC)
        assert [u.pkgname for u in updates] == ["libadwaita", "eos-hooks"]
        assert updates[0].source_repo is Repo.EXTRA
        assert updates[1].source_repo == OtherRepo("endeavouros")
        assert cache.sources["libadwaita"] is Repo.EXTRA

    @pytest.mark.asyncio
    async def test_online_takes_the_lock_file(self, tmp_path):
        checker = _checker(tmp_path)
        await checker.pacman_online()
        assert (tmp_path / "checkupdates.lock").exists()

    @pytest.mark.asyncio
    async def test_offline_reuses_cache(self, tmp_path):
        checker = _checker(tmp_path)
        online, cache = await checker.pacman_online()
        checker.pacman.sync_listing.reset_mock()

        offline = await checker.pacman_offline(cache)

        checker.pacman.checkupdates.assert_awaited_with(CheckupdatesMode.NO_SYNC)
        checker.pacman.sync_listing.assert_not_awaited()
        assert offline == online


class TestAurChecks:
    @pytest.mark.asyncio
    async def test_online_returns_due_and_full_cache(self, tmp_path):
        checker = _checker(tmp_path)
        due, cache = await checker.aur_online()

        checker.aur.info.assert_awaited_once_with(
            ["watchman-bin", "paru", "hyprlang-git", "local-only"]
        )
        assert [u.pkgname for u in due] == ["watchman-bin", "hyprlang-git"]
        assert due[0].pkgver_new == "2024.04.22.00"
        assert {c.pkgname for c in cache.packages} == {"watchman-bin", "paru", "hyprlang-git"}

    @pytest.mark.asyncio
    async def test_unorderable_versions_not_due(self, tmp_path):
        checker = _checker(tmp_path)
        checker.aur.info.return_value = [
            {"Name": "hyprlang-git", "Version": "gfff0000-1", "PackageBase": "hyprlang-git"},
        ]
        due, cache = await checker.aur_online()
        assert due == []
        assert [c.pkgname for c in cache.packages] == ["hyprlang-git"]

    @pytest.mark.asyncio
    async def test_letter_segments_are_ordered(self, tmp_path):
        checker = _checker(tmp_path, installed=[Package("openssl-1.1", "1.1.1w", "1")])
        checker.aur.info.return_value = [
            {"Name": "openssl-1.1", "Version": "1.1.1x-1", "PackageBase": "openssl-1.1"},
        ]
        due, _ = await checker.aur_online()
        assert [u.pkgver_new for u in due] == ["1.1.1x"]

    @pytest.mark.asyncio
    async def test_bad_version_string_fails_whole_check(self, tmp_path):
        checker = _checker(tmp_path)
        checker.aur.info.return_value = [{"Name": "paru", "Version": "2.0.4"}]
        with pytest.raises(VersionParseError):
            await checker.aur_online()

    @pytest.mark.asyncio
    async def test_offline_matches_online_when_nothing_changed(self, tmp_path):
        checker = _checker(tmp_path)
        online, cache = await checker.aur_online()
        assert await checker.aur_offline(cache) == online

    @pytest.mark.asyncio
    async def test_offline_drops_upgraded_packages(self, tmp_path):
        checker = _checker(tmp_path)
        _, cache = await checker.aur_online()
        checker.pacman.foreign_packages.return_value = [
            Package("watchman-bin", "2024.04.22.00", "1"),
            Package("paru", "2.0.3", "1"),
        ]
        assert await checker.aur_offline(cache) == []

    @pytest.mark.asyncio
    async def test_offline_uncached_package_never_due(self, tmp_path):
        checker = _checker(tmp_path)
        checker.pacman.foreign_packages.return_value = [Package("new-pkg", "1.0", "1")]
        assert await checker.aur_offline(AurUpdatesCache()) == []

    @pytest.mark.asyncio
    async def test_offline_is_subset_of_online(self, tmp_path):
        checker = _checker(tmp_path)
        online, cache = await checker.aur_online()
        # Partially upgraded system, plus a package installed after the online check
        checker.pacman.foreign_packages.return_value = [
            Package("watchman-bin", "2024.04.20.00", "1"),
            Package("paru", "2.0.3", "1"),
            Package("fresh", "0.1", "1"),
        ]
        offline = await checker.aur_offline(cache)
        assert {u.pkgname for u in offline} <= {u.pkgname for u in online}

    @pytest.mark.asyncio
    async def test_offline_does_not_touch_network(self, tmp_path):
        checker = _checker(tmp_path)
        await checker.aur_offline(AurUpdatesCache((AurUpdate("paru", "2.0.3", "1", "2.0.4", "1"),)))
        checker.aur.info.assert_not_awaited()


class TestDevelChecks:
    @pytest.mark.asyncio
    async def test_one_record_per_git_source(self, tmp_path, sample_srcinfo):
        checker = _checker(tmp_path, srcinfo=sample_srcinfo)
        due, cache = await checker.devel_online()

        assert [c.ref_id_new for c in cache.packages] == ["abc1234", "fff0000"]
        checker.head_lookup.assert_any_await("https://github.com/hyprwm/hyprlang.git", None)
        checker.head_lookup.assert_any_await("https://example.com/extra.git", "dev")

    @pytest.mark.asyncio
    async def test_due_if_any_source_mismatches(self, tmp_path, sample_srcinfo):
        checker = _checker(tmp_path, srcinfo=sample_srcinfo)
        due, _ = await checker.devel_online()
        # pkgver contains abc1234, but the second source moved on
        assert len(due) == 1
        assert due[0].pkgname == "hyprlang-git"
        assert due[0].ref_id_new == "fff0000"

    @pytest.mark.asyncio
    async def test_packages_missing_from_aur_skipped(self, tmp_path, sample_srcinfo):
        installed = INSTALLED_FOREIGN + [Package("private-git", "r1.g0000000", "1")]
        checker = _checker(tmp_path, installed=installed, srcinfo=sample_srcinfo)
        _, cache = await checker.devel_online()
        assert {c.pkgname for c in cache.packages} == {"hyprlang-git"}

    @pytest.mark.asyncio
    async def test_offline_matches_online_when_nothing_changed(self, tmp_path, sample_srcinfo):
        checker = _checker(tmp_path, srcinfo=sample_srcinfo)
        online, cache = await checker.devel_online()
        checker.head_lookup.reset_mock()

        assert await checker.devel_offline(cache) == online
        checker.head_lookup.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_offline_after_upgrade(self, tmp_path):
        checker = _checker(tmp_path)
        cache = DevelUpdatesCache((DevelUpdate("hyprlang-git", "0.5.2.r0.gabc1234", "1", "fff0000"),))
        checker.pacman.devel_packages.return_value = [Package("hyprlang-git", "0.6.0.r3.gfff0000", "1")]
        assert await checker.devel_offline(cache) == []

    @pytest.mark.asyncio
    async def test_offline_without_cached_record(self, tmp_path):
        checker = _checker(tmp_path)
        assert await checker.devel_offline(DevelUpdatesCache()) == []
