from __future__ import annotations

from typing import Protocol


class NotificationPort(Protocol):
    async def send_direct_message(self, account_id: str, text: str) -> bool:
        """Best-effort DM to the account."""
