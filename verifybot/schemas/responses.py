from enum import IntEnum
from typing import Literal, Union

from pydantic import BaseModel

EPHEMERAL = 1 << 6


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    MODAL = 9


class Button(BaseModel):
    type: Literal[2] = 2
    label: str
    style: int = 1
    custom_id: str


class TextInput(BaseModel):
    type: Literal[4] = 4
    custom_id: str
    label: str
    style: int = 1
    min_length: int | None = None
    max_length: int | None = None
    placeholder: str | None = None
    required: bool = True


class ActionRow(BaseModel):
    type: Literal[1] = 1
    components: list[Union[Button, TextInput]]


class MessageData(BaseModel):
    content: str
    flags: int | None = None
    components: list[ActionRow] | None = None


class ModalData(BaseModel):
    custom_id: str
    title: str
    components: list[ActionRow]


class InteractionResponse(BaseModel):
    type: InteractionResponseType
    data: Union[MessageData, ModalData, None] = None
