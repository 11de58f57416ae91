"""Data models for Arch Updates."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class UpdateType(enum.Enum):
    PACMAN = "pacman"
    AUR = "aur"
    DEVEL = "devel"

    @property
    def label(self) -> str:
        return "AUR" if self is UpdateType.AUR else self.value

    @classmethod
    def from_str(cls, s: str) -> UpdateType:
        for member in cls:
            if member.value == s.lower():
                return member
        raise ValueError(f"Unknown update type: {s}")


class CheckType(enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class Package:
    """Locally installed package as reported by pacman."""

    pkgname: str
    pkgver: str
    pkgrel: str
