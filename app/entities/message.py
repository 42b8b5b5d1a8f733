from datetime import datetime
from typing import Literal, NotRequired, TypedDict


class TelegramUser(TypedDict):
    id: int
    is_bot: NotRequired[bool]
    first_name: NotRequired[str]
    username: NotRequired[str]


class TelegramChat(TypedDict):
    id: int
    type: NotRequired[str]


class PhotoSize(TypedDict):
    """One resolution of a photo. Telegram sends them ascending by size."""

    file_id: str
    file_unique_id: NotRequired[str]
    width: NotRequired[int]
    height: NotRequired[int]
    file_size: NotRequired[int]


class Document(TypedDict):
    file_id: str
    file_unique_id: NotRequired[str]
    file_name: NotRequired[str]
    mime_type: NotRequired[str]
    file_size: NotRequired[int]


# "from" is a keyword, hence the functional syntax.
TelegramMessage = TypedDict(
    "TelegramMessage",
    {
        "message_id": int,
        "chat": TelegramChat,
        "from": NotRequired[TelegramUser],
        "date": NotRequired[int],
        "text": NotRequired[str],
        "photo": NotRequired[list[PhotoSize]],
        "document": NotRequired[Document],
    },
)


class TelegramUpdate(TypedDict):
    update_id: int
    message: NotRequired[TelegramMessage]


class RemoteFile(TypedDict):
    """File descriptor returned by getFile."""

    file_id: str
    file_unique_id: NotRequired[str]
    file_size: NotRequired[int]
    file_path: NotRequired[str]


class TextContent(TypedDict):
    type: Literal["text"]
    text: str


class ImageContent(TypedDict):
    """Image part. ``base64`` holds a full data URL (data:<mime>;base64,<payload>)."""

    type: Literal["image"]
    name: str
    base64: str


ContentPart = TextContent | ImageContent


class PromptEnvelope(TypedDict):
    """Prompt sent to the chat backend for one inbound message."""

    content: list[ContentPart]
    date: datetime


class ReplyEnvelope(TypedDict):
    """Reply produced by the chat backend."""

    content: list[ContentPart]
