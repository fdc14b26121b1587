from typing import Optional, Protocol


class CodeStorePort(Protocol):
    """
    Key-value store with per-key TTL. Expiry is enforced by the backend;
    only single-key operations are atomic.
    """

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write/replace key; it becomes unreachable after ttl_seconds."""

    async def get(self, key: str) -> Optional[str]:
        """Return the value or None when absent or expired."""

    async def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
