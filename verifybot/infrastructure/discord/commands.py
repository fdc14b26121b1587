from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from verifybot.infrastructure.discord.rest import DiscordRestAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlashCommand:
    name: str
    description: str


# Available in every guild and in DMs
GLOBAL_COMMANDS: tuple[SlashCommand, ...] = (
    SlashCommand("verify", "Start the verification process to get server access"),
)

# Only registered for the configured guild
GUILD_COMMANDS: tuple[SlashCommand, ...] = (
    SlashCommand("setup", "Setup verification system (Admin only)"),
    SlashCommand("verify_modal", "Open verification modal (for testing)"),
)


class DiscordCommandRegistrar(DiscordRestAdapter):
    """Upserts slash commands. POSTing an existing name overwrites it."""

    async def upsert_global(self, application_id: str, command: SlashCommand) -> bool:
        return await self._upsert(
            f"/applications/{application_id}/commands", command, scope="global"
        )

    async def upsert_guild(
        self, application_id: str, guild_id: str, command: SlashCommand
    ) -> bool:
        return await self._upsert(
            f"/applications/{application_id}/guilds/{guild_id}/commands",
            command,
            scope="guild",
        )

    async def register_all(
        self, application_id: str, guild_id: str | None = None
    ) -> dict[str, bool]:
        results: dict[str, bool] = {}
        for command in GLOBAL_COMMANDS:
            results[command.name] = await self.upsert_global(application_id, command)
        if guild_id:
            for command in GUILD_COMMANDS:
                results[command.name] = await self.upsert_guild(
                    application_id, guild_id, command
                )
        else:
            logger.info("no guild configured, skipping guild commands")
        return results

    async def _upsert(self, path: str, command: SlashCommand, *, scope: str) -> bool:
        resp = await self._request("POST", path, json=asdict(command))
        ok = resp is not None
        logger.info(
            "command registered" if ok else "command registration failed",
            extra={"command": command.name, "scope": scope},
        )
        return ok
