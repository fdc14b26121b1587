import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from verifybot.application.consume_code import send_welcome, verify_and_consume_code
from verifybot.application.issue_code import issue_verification_code
from verifybot.domain.entities import Account, GrantTarget, KeyLayout
from verifybot.domain.errors import (
    CodeOwnershipMismatch,
    CodeStoreUnavailable,
    GrantFailed,
    InvalidOrExpiredCode,
    UnauthorizedRequest,
    UnknownInteraction,
)
from verifybot.domain.ports.code_store import CodeStorePort
from verifybot.domain.ports.notification_port import NotificationPort
from verifybot.domain.ports.role_gateway import RoleGrantPort
from verifybot.domain.ports.signature_verifier import SignatureVerifier
from verifybot.infrastructure.security.signature import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
)
from verifybot.presentation import replies
from verifybot.presentation.dependencies import (
    get_code_store,
    get_code_ttl_seconds,
    get_grant_target,
    get_index_ttl_seconds,
    get_key_layout,
    get_notifier,
    get_public_key,
    get_role_gateway,
    get_verify_signature,
)
from verifybot.schemas.requests import ADMINISTRATOR, Interaction, InteractionType
from verifybot.schemas.responses import InteractionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Interactions"])


async def signed_interaction(
    request: Request,
    verify_signature: Annotated[SignatureVerifier, Depends(get_verify_signature)],
    public_key: Annotated[str, Depends(get_public_key)],
) -> Interaction:
    raw_body = await request.body()
    if not verify_signature(
        raw_body,
        request.headers.get(SIGNATURE_HEADER),
        request.headers.get(TIMESTAMP_HEADER),
        public_key,
    ):
        raise UnauthorizedRequest()
    try:
        return Interaction.model_validate_json(raw_body)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="malformed interaction"
        )


@router.get("/", response_class=PlainTextResponse)
async def get_root() -> str:
    return "Discord Verification Bot is running!"


@router.post(
    "/",
    response_model=InteractionResponse,
    response_model_exclude_none=True,
)
@router.post(
    "/interactions",
    response_model=InteractionResponse,
    response_model_exclude_none=True,
)
async def post_interaction(
    interaction: Annotated[Interaction, Depends(signed_interaction)],
    background_tasks: BackgroundTasks,
    code_store: Annotated[CodeStorePort, Depends(get_code_store)],
    role_gateway: Annotated[RoleGrantPort, Depends(get_role_gateway)],
    notifier: Annotated[NotificationPort, Depends(get_notifier)],
    target: Annotated[GrantTarget, Depends(get_grant_target)],
    keys: Annotated[KeyLayout, Depends(get_key_layout)],
    code_ttl_seconds: Annotated[int, Depends(get_code_ttl_seconds)],
    index_ttl_seconds: Annotated[int, Depends(get_index_ttl_seconds)],
) -> InteractionResponse:
    try:
        if interaction.type == InteractionType.PING:
            return replies.pong()

        if interaction.type == InteractionType.APPLICATION_COMMAND:
            name = interaction.data.name if interaction.data else None
            if name == "verify":
                account = _require_account(interaction)
                try:
                    issued = await issue_verification_code(
                        code_store,
                        account.id,
                        code_ttl_seconds=code_ttl_seconds,
                        index_ttl_seconds=index_ttl_seconds,
                        keys=keys,
                    )
                except CodeStoreUnavailable as exc:
                    logger.error(
                        "code store unavailable, no code issued",
                        extra={"account_id": account.id, "error": str(exc)},
                    )
                    return replies.message(replies.TRY_AGAIN)
                return replies.verification_prompt(issued.code)
            if name == "setup":
                if not interaction.has_permission(ADMINISTRATOR):
                    return replies.message(replies.ADMIN_ONLY)
                return replies.setup_message()
            if name == "verify_modal":
                return replies.verification_modal()
            raise UnknownInteraction("command", name)

        if interaction.type == InteractionType.MESSAGE_COMPONENT:
            custom_id = interaction.data.custom_id if interaction.data else None
            if custom_id == replies.OPEN_MODAL_BUTTON_ID:
                return replies.verification_modal()
            raise UnknownInteraction("component", custom_id)

        if interaction.type == InteractionType.MODAL_SUBMIT:
            custom_id = interaction.data.custom_id if interaction.data else None
            if custom_id != replies.VERIFY_MODAL_ID:
                raise UnknownInteraction("modal submission", custom_id)
            return await _submit_code(
                interaction,
                code_store=code_store,
                role_gateway=role_gateway,
                notifier=notifier,
                background_tasks=background_tasks,
                target=target,
                keys=keys,
                index_ttl_seconds=index_ttl_seconds,
            )
    except UnknownInteraction as exc:
        logger.info(
            "unhandled interaction",
            extra={"kind": exc.kind, "identifier": exc.identifier},
        )
        return replies.unknown(exc)

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown interaction type"
    )


def _require_account(interaction: Interaction) -> Account:
    account = interaction.account()
    if account is None:
        raise UnknownInteraction("user")
    return account


async def _submit_code(
    interaction: Interaction,
    *,
    code_store: CodeStorePort,
    role_gateway: RoleGrantPort,
    notifier: NotificationPort,
    background_tasks: BackgroundTasks,
    target: GrantTarget,
    keys: KeyLayout,
    index_ttl_seconds: int,
) -> InteractionResponse:
    account = _require_account(interaction)
    submitted = interaction.field_value(replies.CODE_FIELD_ID) or ""
    try:
        await verify_and_consume_code(
            code_store=code_store,
            role_gateway=role_gateway,
            account=account,
            code=submitted,
            target=target,
            index_ttl_seconds=index_ttl_seconds,
            keys=keys,
        )
    except InvalidOrExpiredCode:
        return replies.message(replies.INVALID_OR_EXPIRED)
    except CodeOwnershipMismatch:
        return replies.message(replies.OWNERSHIP_MISMATCH)
    except GrantFailed as exc:
        logger.error(
            "role grant failed, code kept for retry",
            extra={"account_id": account.id, "error": str(exc)},
        )
        return replies.message(replies.GRANT_FAILED)
    except CodeStoreUnavailable as exc:
        logger.error(
            "code store unavailable, nothing granted",
            extra={"account_id": account.id, "error": str(exc)},
        )
        return replies.message(replies.TRY_AGAIN)

    # Runs after the reply is sent; Discord wants an answer within 3 s.
    background_tasks.add_task(send_welcome, notifier, account)
    return replies.message(replies.VERIFIED)
