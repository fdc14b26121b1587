from enum import IntEnum

from pydantic import BaseModel, Field

from verifybot.domain.entities import Account

ADMINISTRATOR = 1 << 3


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    MODAL_SUBMIT = 5


class DiscordUser(BaseModel):
    id: str
    username: str | None = None


class GuildMember(BaseModel):
    user: DiscordUser | None = None
    permissions: str | None = Field(None, description="Permission bitfield as a decimal string")


class SubmittedField(BaseModel):
    type: int
    custom_id: str | None = None
    value: str | None = None


class SubmittedRow(BaseModel):
    type: int = 1
    components: list[SubmittedField] = []


class InteractionData(BaseModel):
    name: str | None = None
    custom_id: str | None = None
    component_type: int | None = None
    components: list[SubmittedRow] = []


class Interaction(BaseModel):
    id: str | None = None
    application_id: str | None = None
    type: int
    guild_id: str | None = None
    data: InteractionData | None = None
    member: GuildMember | None = None
    user: DiscordUser | None = None

    def account(self) -> Account | None:
        # Guild invocations carry member.user, DMs carry user.
        user = self.member.user if self.member and self.member.user else self.user
        if user is None or not user.id.strip():
            return None
        return Account(id=user.id, username=user.username)

    def has_permission(self, bit: int) -> bool:
        if self.member is None or not self.member.permissions:
            return False
        try:
            return bool(int(self.member.permissions) & bit)
        except ValueError:
            return False

    def field_value(self, custom_id: str) -> str | None:
        if self.data is None:
            return None
        for row in self.data.components:
            for field in row.components:
                if field.custom_id == custom_id:
                    return field.value
        return None
