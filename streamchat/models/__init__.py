"""Pydantic models shared by the relay and the chat client.

Models:
    - ChatMessage: Individual message in the conversation
    - ChatRequest: Payload accepted by POST /api/chat
    - ErrorResponse: JSON body of 400 and 500 responses
"""

from streamchat.models.schemas import (
    INTERNAL_ERROR,
    INVALID_MESSAGES,
    ChatMessage,
    ChatRequest,
    ErrorResponse,
    Role,
)

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_MESSAGES",
    "ChatMessage",
    "ChatRequest",
    "ErrorResponse",
    "Role",
]
