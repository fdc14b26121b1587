import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from verifybot.domain.errors import UnauthorizedRequest
from verifybot.infrastructure.discord.direct_messages import DiscordDirectMessages
from verifybot.infrastructure.discord.roles import DiscordRoleGateway
from verifybot.infrastructure.http.client import (
    close_http_client,
    get_http_client,
    open_http_client,
)
from verifybot.infrastructure.redis_cache.pool import close_redis, get_redis
from verifybot.logging import setup_logging
from verifybot.presentation.api import api
from verifybot.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    await open_http_client(
        base_url=settings.discord_api_base_url,
        bot_token=settings.discord_bot_token,
        timeout=settings.http_timeout_seconds,
    )

    get_redis()

    # Gateways share the one HTTP client and never close it themselves
    app.state.role_gateway = DiscordRoleGateway(
        settings.discord_api_base_url,
        bot_token=settings.discord_bot_token,
        client=get_http_client(),
    )
    app.state.notifier = DiscordDirectMessages(
        settings.discord_api_base_url,
        bot_token=settings.discord_bot_token,
        client=get_http_client(),
    )

    try:
        yield
    finally:
        # shutdown
        await close_http_client()
        await close_redis()


async def unauthorized_handler(request: Request, exc: UnauthorizedRequest):
    logger.warning(
        "rejected unsigned interaction",
        extra={"client": request.client.host if request.client else None},
    )
    return PlainTextResponse("Invalid signature", status_code=401)


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Verification Bot", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_exception_handler(UnauthorizedRequest, unauthorized_handler)
    app.include_router(api)
    return app


app = create_app()
