"""Streaming HTTP client for the chat relay."""

import logging
from collections.abc import AsyncGenerator, Callable, Sequence

import httpx

from streamchat.models.schemas import ChatMessage, ChatRequest
from streamchat.settings import get_server_settings
from streamchat.ui.session import (
    ConversationReset,
    ConversationState,
    DraftCommitted,
    Event,
    FragmentReceived,
    StreamEnded,
    Submitted,
    transition,
)

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


async def stream_chat_response(
    client: httpx.AsyncClient,
    messages: Sequence[ChatMessage],
) -> AsyncGenerator[str]:
    """POST the conversation and yield decoded text as it arrives.

    Args:
        client: HTTP client pointed at the relay.
        messages: Full conversation history including the new user turn.

    Yields:
        Decoded text segments in arrival order.

    Raises:
        httpx.HTTPError: On connection failure, non-2xx status or read error.
    """
    payload = ChatRequest(messages=list(messages)).model_dump(mode="json")
    async with client.stream("POST", CHAT_PATH, json=payload) as response:
        response.raise_for_status()
        async for text in response.aiter_text():
            yield text


class ConversationClient:
    """Drives one chat session against the relay.

    Owns the ``ConversationState`` and notifies ``on_change`` after every
    transition so the page can re-render.
    """

    def __init__(
        self,
        base_url: str | None = None,
        on_change: Callable[[ConversationState], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.state = ConversationState()
        self._base_url = base_url or get_server_settings().relay_url
        self._on_change = on_change
        self._transport = transport

    def dispatch(self, event: Event) -> ConversationState:
        self.state = transition(self.state, event)
        if self._on_change is not None:
            self._on_change(self.state)
        return self.state

    def reset(self) -> None:
        self.dispatch(ConversationReset())

    async def submit(self, text: str) -> bool:
        """Send a user message and stream the assistant's reply into history.

        Ignored while a previous request is still running or when ``text`` is
        blank. Any failure ends the stream early; whatever was received is
        still committed and the client always returns to idle.

        Args:
            text: The user's message.

        Returns:
            True if a request was issued.
        """
        before = self.state
        if self.dispatch(Submitted(text=text)) is before:
            return False

        try:
            # No timeout: a response runs until the relay closes it.
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=None,
                transport=self._transport,
            ) as client:
                async for fragment in stream_chat_response(client, self.state.history):
                    self.dispatch(FragmentReceived(text=fragment))
        except httpx.HTTPError as e:
            logger.error(f"Chat stream failed: {e}")
        except Exception:
            logger.exception("Chat stream failed unexpectedly")
        finally:
            self.dispatch(StreamEnded())
            self.dispatch(DraftCommitted())
        return True
