"""
Advisory ``account -> outstanding codes`` index.

Updates are a plain read-modify-write of a JSON list, so two concurrent
writers can lose each other's entry. Nothing on the verify path reads this
index; every failure here is logged and dropped.
"""

from __future__ import annotations

import json
import logging

from verifybot.domain.ports.code_store import CodeStorePort

logger = logging.getLogger(__name__)


async def load_outstanding_codes(code_store: CodeStorePort, key: str) -> list[str]:
    raw = await code_store.get(key)
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except ValueError:
        logger.warning("discarding unreadable account code index", extra={"key": key})
        return []
    if not isinstance(decoded, list):
        return []
    return [c for c in decoded if isinstance(c, str)]


async def track_outstanding_code(
    code_store: CodeStorePort, key: str, code: str, ttl_seconds: int
) -> None:
    try:
        codes = await load_outstanding_codes(code_store, key)
        if code not in codes:
            codes.append(code)
        await code_store.put(key, json.dumps(codes), ttl_seconds)
    except Exception as exc:
        logger.warning(
            "account code index append failed",
            extra={"key": key, "error": repr(exc)},
        )


async def forget_outstanding_code(
    code_store: CodeStorePort, key: str, code: str, ttl_seconds: int
) -> None:
    try:
        codes = await load_outstanding_codes(code_store, key)
        remaining = [c for c in codes if c != code]
        if remaining:
            await code_store.put(key, json.dumps(remaining), ttl_seconds)
        else:
            await code_store.delete(key)
    except Exception as exc:
        logger.warning(
            "account code index removal failed",
            extra={"key": key, "error": repr(exc)},
        )
