"""Chat relay endpoint.

Accepts a conversation, opens an upstream completion stream and forwards
each text fragment as a chunk of a plain-text response.
"""

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError

from streamchat.models.schemas import (
    INTERNAL_ERROR,
    INVALID_MESSAGES,
    ChatRequest,
    ErrorResponse,
)
from streamchat.relay.service import get_relay_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _parse_messages(body: object) -> ChatRequest | None:
    """Validate the request body.

    Args:
        body: Decoded JSON body.

    Returns:
        The validated request, or None if ``messages`` is missing, not a
        list, empty, or holds something that is not a chat message.
    """
    if not isinstance(body, dict) or not isinstance(body.get("messages"), list):
        return None
    try:
        return ChatRequest.model_validate(body)
    except ValidationError:
        return None


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid messages format"},
        500: {"model": ErrorResponse, "description": "Upstream setup failed"},
    },
)
async def chat(request: Request) -> Response:
    """Relay a conversation to the inference provider and stream the answer.

    Request body: ``{"messages": [{"role": "user", "content": "..."}, ...]}``.

    Returns:
        200 chunked ``text/plain`` body with the raw concatenated deltas.

    Raises:
        400: ``messages`` missing, not a list, empty or malformed.
        500: Body unreadable or upstream call could not be opened.
    """
    try:
        body = await request.json()
        chat_request = _parse_messages(body)
        if chat_request is None:
            logger.warning("Rejected chat request with invalid messages")
            return _error_response(status.HTTP_400_BAD_REQUEST, INVALID_MESSAGES)

        relay = get_relay_service()
        stream = await relay.open_stream(chat_request.messages)
        logger.info(f"Relaying conversation of {len(chat_request.messages)} messages")

        return StreamingResponse(
            relay.iter_deltas(stream),
            media_type="text/plain",
            headers={"Transfer-Encoding": "chunked"},
        )
    except Exception:
        logger.exception("Chat relay failed before streaming")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
