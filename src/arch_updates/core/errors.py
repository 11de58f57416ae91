"""Exceptions raised while checking for updates."""

from __future__ import annotations


class UpdateCheckError(Exception):
    """Base class for every failure of a single source check."""


class CommandError(UpdateCheckError):
    """An external command could not be run or exited unexpectedly."""

    def __init__(self, command: list[str] | tuple[str, ...], message: str, returncode: int | None = None):
        self.command = tuple(command)
        self.returncode = returncode
        super().__init__(f"IO error running command `{' '.join(self.command)}`: {message}")


class ParseError(UpdateCheckError):
    """Output from an external tool did not have the expected shape."""

    description = "Failed to parse"

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"{self.description}: `{text}`")


class UpdateLineParseError(ParseError):
    description = "Failed to parse update from checkupdates string"


class PackageLineParseError(ParseError):
    description = "Failed to parse update from pacman string"


class VersionParseError(ParseError):
    description = "Failed to parse pkgver and pkgrel from string"


class SrcinfoParseError(ParseError):
    description = "Error parsing .SRCINFO"


class HeadIdentifierError(ParseError):
    description = "Head identifier too short"


class WebError(UpdateCheckError):
    """An HTTP request failed or the AUR returned an error payload."""


class AurPackageError(WebError):
    """Getting info for one or more packages from the AUR failed.

    The RPC answers for a batch of names, so the failing package is not
    always known.
    """

    def __init__(self, pkgname: str | None = None, reason: str = ""):
        self.pkgname = pkgname
        target = f"`{pkgname}`" if pkgname else "packages"
        message = f"Failed to get {target} from AUR"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CheckTimeoutError(UpdateCheckError):
    """A source check did not finish within its time bound."""

    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__(f"Timeout occurred after {seconds:g}s")


class LockError(UpdateCheckError):
    """The checkupdates lock file could not be created or locked."""
