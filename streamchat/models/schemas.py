from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

INVALID_MESSAGES = "Invalid messages format"
INTERNAL_ERROR = "Internal Server Error"


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in the conversation.

    Messages are frozen: once appended to history they never change.

    Attributes:
        role: Who wrote the message (user or assistant).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload for the chat relay endpoint.

    Attributes:
        messages: Full conversation history, oldest first. Must not be empty.
    """

    messages: list[ChatMessage] = Field(..., min_length=1)


class ErrorResponse(BaseModel):
    """Generic error body returned for rejected or failed requests."""

    error: str
