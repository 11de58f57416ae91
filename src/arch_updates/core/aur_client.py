"""AUR RPC and cgit client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from arch_updates.config.settings import settings
from arch_updates.core.errors import AurPackageError, WebError

logger = logging.getLogger(__name__)

# The AUR rejects info requests with overly long query strings.
MAX_NAMES_PER_REQUEST = 150


class AurClient:
    """Thin wrapper around the AUR web interface.

    See https://wiki.archlinux.org/title/Aurweb_RPC_interface
    """

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 30.0):
        self._client = client
        self._owns_client = client is None
        self.timeout = timeout

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def info(self, names: list[str]) -> list[dict[str, Any]]:
        """Bulk package info lookup.

        Names the AUR doesn't know are simply absent from the result.
        """
        results: list[dict[str, Any]] = []
        for start in range(0, len(names), MAX_NAMES_PER_REQUEST):
            chunk = names[start:start + MAX_NAMES_PER_REQUEST]
            results.extend(await self._info_chunk(chunk))
        return results

    async def _info_chunk(self, names: list[str]) -> list[dict[str, Any]]:
        if not names:
            return []
        params: list[tuple[str, str]] = [("v", "5"), ("type", "info")]
        params.extend(("arg[]", name) for name in names)
        pkgname = names[0] if len(names) == 1 else None
        try:
            resp = await self.client.get(settings.aur_rpc_url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AurPackageError(pkgname, str(e)) from e

        if data.get("type") == "error":
            raise AurPackageError(pkgname, data.get("error", "unknown error"))
        return data.get("results", [])

    async def get_srcinfo(self, pkgname: str) -> str | None:
        """Fetch the raw .SRCINFO for a package, or None if it isn't in the AUR.

        The package may live in a differently named base repository (a base
        can build several packages), so the base is looked up first.
        """
        info = await self.info([pkgname])
        if not info:
            return None
        base = info[0].get("PackageBase") or pkgname
        try:
            resp = await self.client.get(settings.aur_srcinfo_url, params={"h": base})
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise WebError(f"Web error `{e}`") from e
        return resp.text
