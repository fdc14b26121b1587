from verifybot.domain.errors import UnknownInteraction
from verifybot.schemas.responses import (
    EPHEMERAL,
    ActionRow,
    Button,
    InteractionResponse,
    InteractionResponseType,
    MessageData,
    ModalData,
    TextInput,
)

OPEN_MODAL_BUTTON_ID = "open_verify_modal"
VERIFY_MODAL_ID = "verify_modal"
CODE_FIELD_ID = "verification_code"

INVALID_OR_EXPIRED = (
    "❌ Invalid or expired verification code. "
    "Please run `/verify` again to get a new code."
)
OWNERSHIP_MISMATCH = "❌ This verification code was not generated for your account."
GRANT_FAILED = (
    "❌ Failed to complete verification. "
    "Please contact an administrator for help."
)
VERIFIED = (
    "✅ **Verification Successful!**\n\n"
    "You now have access to all channels in the server. Welcome! 🎉"
)
TRY_AGAIN = "⚠️ Verification is temporarily unavailable. Please try again in a moment."
ADMIN_ONLY = "You need administrator permissions to use this command."
SETUP_INSTRUCTIONS = (
    "🔐 **Server Verification**\n\n"
    "To gain access to this server, you need to verify your account.\n\n"
    "**How to verify:**\n"
    "1. Use the `/verify` command\n"
    "2. You'll receive a verification code\n"
    "3. Enter the code when prompted\n"
    "4. Get your verified role automatically!\n\n"
    "Need help? Contact server staff."
)


def pong() -> InteractionResponse:
    return InteractionResponse(type=InteractionResponseType.PONG)


def message(
    content: str, *, ephemeral: bool = True, buttons: list[Button] | None = None
) -> InteractionResponse:
    return InteractionResponse(
        type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        data=MessageData(
            content=content,
            flags=EPHEMERAL if ephemeral else None,
            components=[ActionRow(components=buttons)] if buttons else None,
        ),
    )


def verification_prompt(code: str) -> InteractionResponse:
    return message(
        "🔐 **Verification Process**\n\n"
        f"Your verification code is: **{code}**\n\n"
        "Click the button below to enter your code and complete verification.",
        buttons=[Button(label="Enter Verification Code", custom_id=OPEN_MODAL_BUTTON_ID)],
    )


def setup_message() -> InteractionResponse:
    return message(
        SETUP_INSTRUCTIONS,
        ephemeral=False,
        buttons=[Button(label="Start Verification", custom_id=OPEN_MODAL_BUTTON_ID)],
    )


def verification_modal() -> InteractionResponse:
    return InteractionResponse(
        type=InteractionResponseType.MODAL,
        data=ModalData(
            custom_id=VERIFY_MODAL_ID,
            title="Account Verification",
            components=[
                ActionRow(
                    components=[
                        TextInput(
                            custom_id=CODE_FIELD_ID,
                            label="Verification Code",
                            min_length=6,
                            max_length=6,
                            placeholder="Enter the 6-digit code from /verify",
                        )
                    ]
                )
            ],
        ),
    )


def unknown(exc: UnknownInteraction) -> InteractionResponse:
    return message(f"Unknown {exc.kind}")
