"""Pytest fixtures for arch-updates tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from arch_updates.config.settings import Settings
from arch_updates.models.repo import Repo
from arch_updates.models.update import (
    AurUpdate,
    AurUpdatesCache,
    DevelUpdate,
    DevelUpdatesCache,
    PacmanUpdate,
    PacmanUpdatesCache,
)

SAMPLE_SRCINFO = """\
pkgbase = hyprlang-git
\tpkgdesc = The official implementation library for the hypr config language
\tpkgver = 0.5.2.r0.gabc1234
\tpkgrel = 1
\turl = https://github.com/hyprwm/hyprlang
\tarch = x86_64
\tsource = hyprlang::git+https://github.com/hyprwm/hyprlang.git
\tsource_x86_64 = extra::git+https://example.com/extra.git?signed#branch=dev
\tsource = fix.patch
\tsha256sums = SKIP

pkgname = hyprlang-git
\tsource = git+https://example.com/never-read.git
"""


@pytest.fixture
def sample_srcinfo() -> str:
    return SAMPLE_SRCINFO


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings configured for testing: small numbers, unbounded queue."""
    return Settings(
        interval_secs=1,
        timeout_secs=5,
        online_check_period=3,
        message_buffer=0,
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def pacman_update() -> PacmanUpdate:
    return PacmanUpdate(
        pkgname="libadwaita",
        pkgver_cur="1:1.6.0",
        pkgrel_cur="1",
        pkgver_new="1:1.6.1",
        pkgrel_new="2",
        source_repo=Repo.EXTRA,
    )


@pytest.fixture
def aur_update() -> AurUpdate:
    return AurUpdate(
        pkgname="watchman-bin",
        pkgver_cur="2024.04.15.00",
        pkgrel_cur="1",
        pkgver_new="2024.04.22.00",
        pkgrel_new="1",
    )


@pytest.fixture
def devel_update() -> DevelUpdate:
    return DevelUpdate(
        pkgname="winetricks-git",
        pkgver_cur="20240105.r47.g72b934e1",
        pkgrel_cur="2",
        ref_id_new="0f1e2d3",
    )


@pytest.fixture
def mock_checker(pacman_update, aur_update, devel_update) -> MagicMock:
    """UpdateChecker stand-in where every source succeeds."""
    checker = MagicMock()
    checker.pacman_online = AsyncMock(return_value=([pacman_update], PacmanUpdatesCache()))
    checker.aur_online = AsyncMock(return_value=([aur_update], AurUpdatesCache((aur_update,))))
    checker.devel_online = AsyncMock(return_value=([devel_update], DevelUpdatesCache((devel_update,))))
    checker.pacman_offline = AsyncMock(return_value=[pacman_update])
    checker.aur_offline = AsyncMock(return_value=[aur_update])
    checker.devel_offline = AsyncMock(return_value=[])
    checker.aclose = AsyncMock()
    return checker
