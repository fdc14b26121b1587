from fastapi import Request

from verifybot.domain.entities import GrantTarget, KeyLayout
from verifybot.domain.ports.code_store import CodeStorePort
from verifybot.domain.ports.notification_port import NotificationPort
from verifybot.domain.ports.role_gateway import RoleGrantPort
from verifybot.domain.ports.signature_verifier import SignatureVerifier
from verifybot.infrastructure.redis_cache.code_store import RedisCodeStore
from verifybot.infrastructure.redis_cache.pool import get_redis
from verifybot.infrastructure.security.signature import verify_request_signature
from verifybot.settings import get_settings


def get_code_store() -> CodeStorePort:
    return RedisCodeStore(get_redis())


def get_verify_signature() -> SignatureVerifier:
    return verify_request_signature


def get_public_key() -> str:
    return get_settings().discord_public_key


def get_code_ttl_seconds() -> int:
    return get_settings().code_ttl_seconds


def get_index_ttl_seconds() -> int:
    return get_settings().account_index_ttl_seconds


def get_key_layout() -> KeyLayout:
    settings = get_settings()
    return KeyLayout(
        code_prefix=settings.code_key_prefix,
        account_prefix=settings.account_key_prefix,
    )


def get_grant_target() -> GrantTarget:
    settings = get_settings()
    return GrantTarget(guild_id=settings.guild_id, role_id=settings.verified_role_id)


def get_role_gateway(request: Request) -> RoleGrantPort:
    # This is set in verifybot.main lifespan()
    return request.app.state.role_gateway


def get_notifier(request: Request) -> NotificationPort:
    # This is set in verifybot.main lifespan()
    return request.app.state.notifier
