"""Parse VCS source entries from a .SRCINFO."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PackageUrl:
    remote: str
    protocol: str
    branch: str | None = None


def parse_source_url(source: str) -> PackageUrl | None:
    """Parse a `source = [filename::]url` value into a git remote.

    Returns None for non-git sources and for sources pinned to a commit or
    tag, since those can never be behind the latest ref. A fragment other
    than `branch=` falls back to the remote HEAD.
    """
    url = source.split("::", 1)[-1]

    if not url.startswith("git") or "://" not in url:
        return None

    scheme, rest = url.split("://", 1)
    protocol = scheme.rsplit("+", 1)[-1]

    remote, sep, fragment = rest.partition("#")
    remote = remote.split("?", 1)[0]
    remote = f"{protocol}://{remote}"

    branch = None
    if sep:
        fragment = fragment.split("?", 1)[0]
        frag_type, _, value = fragment.partition("=")
        if frag_type in ("commit", "tag"):
            return None
        if frag_type == "branch":
            branch = value

    return PackageUrl(remote=remote, protocol=protocol, branch=branch)
