from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from verifybot.domain.ports.code_store import CodeStorePort


class RedisCodeStore(CodeStorePort):
    """Code store on plain string keys; expiry is Redis' own EX."""

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        await self._redis.set(key, value, ex=ttl_seconds)

    async def get(self, key: str) -> Optional[str]:
        return await self._redis.get(key)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)
