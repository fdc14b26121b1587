from __future__ import annotations

from verifybot.domain.ports.notification_port import NotificationPort
from verifybot.infrastructure.discord.rest import DiscordRestAdapter


class DiscordDirectMessages(DiscordRestAdapter, NotificationPort):
    async def send_direct_message(self, account_id: str, text: str) -> bool:
        # A DM needs a channel first; Discord returns the existing one if any.
        channel = await self._request(
            "POST", "/users/@me/channels", json={"recipient_id": account_id}
        )
        if channel is None:
            return False
        channel_id = channel.json().get("id")
        if not channel_id:
            return False
        sent = await self._request(
            "POST", f"/channels/{channel_id}/messages", json={"content": text}
        )
        return sent is not None
