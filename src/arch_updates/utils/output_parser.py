"""Parsers for pacman, checkupdates and .SRCINFO text output."""

from __future__ import annotations

import re

from arch_updates.core.errors import (
    PackageLineParseError,
    SrcinfoParseError,
    UpdateLineParseError,
    VersionParseError,
)
from arch_updates.models import Package
from arch_updates.models.update import ParsedUpdate

# `source`, or an architecture specific `source_x86_64` etc.
_SOURCE_KEY = re.compile(r"^source(_\w+)?$")


def parse_ver_and_rel(version: str) -> tuple[str, str]:
    """Split a combined `pkgver-pkgrel` string on its last hyphen.

    Example: "1.26.15-1" -> ("1.26.15", "1")
    """
    pkgver, sep, pkgrel = version.rpartition("-")
    if not sep:
        raise VersionParseError(version)
    return pkgver, pkgrel


def parse_update_line(line: str) -> ParsedUpdate:
    """Parse one line of `checkupdates` output.

    Example: "libadwaita 1:1.6.0-1 -> 1:1.6.1-2"
    """
    parts = line.split(" ")
    if len(parts) < 4:
        raise UpdateLineParseError(line)
    pkgname, cur, _, new = parts[:4]
    try:
        pkgver_cur, pkgrel_cur = parse_ver_and_rel(cur)
        pkgver_new, pkgrel_new = parse_ver_and_rel(new)
    except VersionParseError as e:
        raise UpdateLineParseError(line) from e
    return ParsedUpdate(
        pkgname=pkgname,
        pkgver_cur=pkgver_cur,
        pkgrel_cur=pkgrel_cur,
        pkgver_new=pkgver_new,
        pkgrel_new=pkgrel_new,
    )


def parse_foreign_line(line: str) -> Package:
    """Parse one line of `pacman -Qm` output.

    Example: "winetricks-git 20240105.r47.g72b934e1-2"
    """
    pkgname, sep, rest = line.partition(" ")
    if not sep:
        raise PackageLineParseError(line)
    try:
        pkgver, pkgrel = parse_ver_and_rel(rest)
    except VersionParseError as e:
        raise PackageLineParseError(line) from e
    return Package(pkgname=pkgname, pkgver=pkgver, pkgrel=pkgrel)


def parse_srcinfo_sources(text: str) -> list[str]:
    """Return the `source` entries of the pkgbase section of a .SRCINFO."""
    sources: list[str] = []
    seen_pkgbase = False
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise SrcinfoParseError(raw)
        key = key.strip()
        value = value.strip()
        if key == "pkgbase":
            seen_pkgbase = True
        elif key == "pkgname":
            # Package sections follow the base; sources only live in the base.
            break
        elif _SOURCE_KEY.match(key):
            sources.append(value)
    if not seen_pkgbase:
        raise SrcinfoParseError(text.strip().splitlines()[0] if text.strip() else text)
    return sources
