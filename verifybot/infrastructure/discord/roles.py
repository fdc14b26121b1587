from __future__ import annotations

import logging

from verifybot.domain.ports.role_gateway import RoleGrantPort
from verifybot.infrastructure.discord.rest import DiscordRestAdapter

logger = logging.getLogger(__name__)


class DiscordRoleGateway(DiscordRestAdapter, RoleGrantPort):
    async def grant_role(self, guild_id: str, account_id: str, role_id: str) -> bool:
        resp = await self._request(
            "PUT", f"/guilds/{guild_id}/members/{account_id}/roles/{role_id}"
        )
        if resp is None:
            return False
        logger.info(
            "role granted",
            extra={"guild_id": guild_id, "account_id": account_id, "role_id": role_id},
        )
        return True
