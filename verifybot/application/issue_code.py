import logging

import verifybot.domain.services as domain_services
from verifybot.application.account_index import track_outstanding_code
from verifybot.domain.entities import IssuedCode, KeyLayout
from verifybot.domain.errors import CodeStoreUnavailable
from verifybot.domain.ports.code_store import CodeStorePort

logger = logging.getLogger(__name__)


async def issue_verification_code(
    code_store: CodeStorePort,
    account_id: str,
    code_ttl_seconds: int = 600,
    index_ttl_seconds: int = 600,
    keys: KeyLayout = KeyLayout(),
) -> IssuedCode:
    generated_code = domain_services.generate_verification_code()

    # A collision with a live code overwrites it; the previous holder re-issues.
    try:
        await code_store.put(keys.code(generated_code), account_id, code_ttl_seconds)
    except Exception as exc:
        raise CodeStoreUnavailable(repr(exc)) from exc
    await track_outstanding_code(
        code_store, keys.account(account_id), generated_code, index_ttl_seconds
    )

    logger.info(
        "verification code issued",
        extra={"account_id": account_id, "ttl_seconds": code_ttl_seconds},
    )
    return IssuedCode(
        code=generated_code, account_id=account_id, ttl_seconds=code_ttl_seconds
    )
