"""Application configuration and defaults."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from arch_updates.models import UpdateType

APP_NAME = "arch-updates"


def _default_data_dir() -> Path:
    """Return the per-user data directory.

    Checks ARCH_UPDATES_DATA_DIR and XDG_DATA_HOME env vars first.
    """
    override = os.environ.get("ARCH_UPDATES_DATA_DIR", "")
    if override:
        return Path(override)
    xdg = os.environ.get("XDG_DATA_HOME", "")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    # How often to compare installed packages with the latest versions in memory.
    interval_secs: int = field(default_factory=lambda: _env_int("ARCH_UPDATES_INTERVAL_SECS", 6))
    # How long a single source check can run before it is abandoned.
    timeout_secs: int = field(default_factory=lambda: _env_int("ARCH_UPDATES_TIMEOUT_SECS", 120))
    # Every `online_check_period` ticks (starting at the first) the latest
    # versions are refreshed from the network.
    online_check_period: int = field(
        default_factory=lambda: _env_int("ARCH_UPDATES_ONLINE_CHECK_PERIOD", 600)
    )
    # Sources still checked and listed, but left out of the total count.
    exclude_from_counter: set[UpdateType] = field(default_factory=set)
    # Unofficial repo name -> package URL template with a `{pkgname}` placeholder.
    other_repo_urls: dict[str, str] = field(default_factory=dict)
    devel_suffixes: tuple[str, ...] = ("-git",)
    aur_rpc_url: str = "https://aur.archlinux.org/rpc/"
    aur_srcinfo_url: str = "https://aur.archlinux.org/cgit/aur.git/plain/.SRCINFO"
    aur_package_url: str = "https://aur.archlinux.org/packages/{pkgname}"
    official_package_url: str = "https://archlinux.org/packages/{repo}/{arch}/{pkgname}/"
    arch: str = field(default_factory=lambda: platform.machine() or "x86_64")
    message_buffer: int = 10
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def lock_file(self) -> Path:
        return self.data_dir / "checkupdates.lock"

    @property
    def timeout(self) -> float:
        return float(self.timeout_secs)


# Global singleton
settings = Settings()
