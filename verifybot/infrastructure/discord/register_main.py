from __future__ import annotations

import asyncio
import logging
import sys

from verifybot.infrastructure.discord.commands import DiscordCommandRegistrar
from verifybot.logging import setup_logging
from verifybot.settings import get_settings

logger = logging.getLogger(__name__)


async def _run() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    if not settings.discord_bot_token:
        logger.error("DISCORD_BOT_TOKEN environment variable is required")
        return 1
    if not settings.discord_application_id:
        logger.error("DISCORD_APPLICATION_ID environment variable is required")
        return 1

    registrar = DiscordCommandRegistrar(
        settings.discord_api_base_url,
        bot_token=settings.discord_bot_token,
        timeout=settings.http_timeout_seconds,
    )
    try:
        logger.info("registering commands")
        results = await registrar.register_all(
            settings.discord_application_id, settings.guild_id or None
        )
    finally:
        await registrar.aclose()

    logger.info(
        "command registration complete",
        extra={"registered": sorted(n for n, ok in results.items() if ok)},
    )
    return 0


def main() -> None:
    sys.exit(asyncio.run(_run()))


if __name__ == "__main__":
    main()
