from __future__ import annotations

from typing import Optional

import httpx

_client: Optional[httpx.AsyncClient] = None


def bot_headers(bot_token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bot {bot_token}",
        "Content-Type": "application/json",
    }


async def open_http_client(
    *, base_url: str = "", bot_token: str = "", timeout: float = 5.0
) -> httpx.AsyncClient:
    """Create the shared Discord REST client (if not already created)."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=bot_headers(bot_token),
            timeout=timeout,
        )
    return _client


def get_http_client() -> httpx.AsyncClient:
    """Return the shared client. Must have been opened at startup."""
    if _client is None:
        raise RuntimeError(
            "HTTP client not opened yet. Call open_http_client() at startup."
        )
    return _client


async def close_http_client() -> None:
    """Close and drop the shared client."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
