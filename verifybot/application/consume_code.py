import logging

from verifybot.application.account_index import forget_outstanding_code
from verifybot.domain.entities import Account, GrantTarget, KeyLayout
from verifybot.domain.errors import (
    CodeOwnershipMismatch,
    CodeStoreUnavailable,
    GrantFailed,
    InvalidOrExpiredCode,
    NotificationFailed,
)
from verifybot.domain.ports.code_store import CodeStorePort
from verifybot.domain.ports.notification_port import NotificationPort
from verifybot.domain.ports.role_gateway import RoleGrantPort
from verifybot.domain.services import is_well_formed_code, secure_compare

logger = logging.getLogger(__name__)


def welcome_text(username: str | None) -> str:
    name = username or "there"
    return (
        f"🎉 **Welcome to the server, {name}!**\n\n"
        "Your verification was successful! You now have full access to the "
        "server. Feel free to explore and introduce yourself!"
    )


async def verify_and_consume_code(
    code_store: CodeStorePort,
    role_gateway: RoleGrantPort,
    account: Account,
    code: str,
    target: GrantTarget,
    index_ttl_seconds: int = 600,
    keys: KeyLayout = KeyLayout(),
) -> None:
    """
    Match ``code`` against the store, grant the role, then consume the code.

    The code key is deleted only after a confirmed grant, so a failed grant
    leaves it usable for a retry by the same account. Two concurrent
    submissions of the same code may both reach the grant; the platform treats
    re-granting a held role as a no-op.
    """
    submitted = code.strip()
    if not is_well_formed_code(submitted):
        raise InvalidOrExpiredCode()

    code_key = keys.code(submitted)
    try:
        stored_account_id = await code_store.get(code_key)
    except Exception as exc:
        raise CodeStoreUnavailable(repr(exc)) from exc
    if stored_account_id is None:
        raise InvalidOrExpiredCode()
    if not secure_compare(stored_account_id, account.id):
        logger.warning(
            "verification code submitted by another account",
            extra={"account_id": account.id},
        )
        raise CodeOwnershipMismatch(submitted, account.id)

    try:
        granted = await role_gateway.grant_role(
            target.guild_id, account.id, target.role_id
        )
    except Exception as exc:
        raise GrantFailed(str(exc)) from exc
    if not granted:
        raise GrantFailed(f"role {target.role_id} not granted to {account.id}")

    # The role is attached; a code left behind here dies with its TTL.
    try:
        await code_store.delete(code_key)
    except Exception as exc:
        logger.error(
            "verification code not deleted after grant",
            extra={"account_id": account.id, "error": repr(exc)},
        )
        return
    await forget_outstanding_code(
        code_store, keys.account(account.id), submitted, index_ttl_seconds
    )
    logger.info("verification code consumed", extra={"account_id": account.id})


async def send_welcome(notifier: NotificationPort, account: Account) -> None:
    """Best-effort welcome DM. Never raises."""
    try:
        if not await notifier.send_direct_message(
            account.id, welcome_text(account.username)
        ):
            raise NotificationFailed(account.id)
    except Exception as exc:
        logger.warning(
            "welcome message not delivered",
            extra={"account_id": account.id, "error": repr(exc)},
        )
