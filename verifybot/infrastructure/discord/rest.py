from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from verifybot.infrastructure.http.client import bot_headers

logger = logging.getLogger(__name__)


class DiscordRestAdapter:
    """
    Thin wrapper over the Discord REST API. Non-2xx answers and transport
    errors come back as ``None`` after being logged; callers decide what a
    missing response means for them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        bot_token: str = "",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = bot_headers(bot_token)
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path if path.startswith('/') else '/' + path}"

    async def _request(
        self, method: str, path: str, *, json: Any = None
    ) -> httpx.Response | None:
        try:
            resp = await self._client.request(
                method, self._url(path), json=json, headers=self._headers
            )
        except httpx.HTTPError as e:
            logger.error(
                "discord request failed",
                extra={"method": method, "path": path, "error": repr(e)},
            )
            return None
        if not (200 <= resp.status_code < 300):
            logger.error(
                "discord responded with an error",
                extra={
                    "method": method,
                    "path": path,
                    "status": resp.status_code,
                    "body": resp.text[:200],
                },
            )
            return None
        return resp

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
