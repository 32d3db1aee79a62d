"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - upstream: Stand-in for the OpenAI SDK client
    - relay_service: RelayService wired to the stand-in client
    - use_relay: Routes the chat endpoint to relay_service
    - async_client: HTTPX client for API testing

No test reaches the network; upstream fragments are real
``ChatCompletionChunk`` objects fed through an async generator.
"""

from collections.abc import AsyncGenerator, Iterable
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from openai.types.chat import ChatCompletionChunk

from streamchat.api import app
from streamchat.relay.config import RelayConfig
from streamchat.relay.service import RelayService


def make_chunk(content: str | None = None, *, with_choice: bool = True) -> ChatCompletionChunk:
    """Build one upstream fragment.

    Args:
        content: Delta text, or None for a fragment without text.
        with_choice: False to build a fragment with an empty choices list.
    """
    delta = {} if content is None else {"content": content}
    choices = [{"index": 0, "delta": delta, "finish_reason": None}] if with_choice else []
    return ChatCompletionChunk.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion.chunk",
            "created": 0,
            "model": "llama-3.1-70b-versatile",
            "choices": choices,
        }
    )


class FakeStream:
    """Stand-in for ``openai.AsyncStream``: async-iterable and closeable."""

    def __init__(
        self,
        chunks: Iterable[ChatCompletionChunk],
        error: Exception | None = None,
    ) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.closed = False

    def __aiter__(self) -> AsyncGenerator[ChatCompletionChunk]:
        return self._iterate()

    async def _iterate(self) -> AsyncGenerator[ChatCompletionChunk]:
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        self.closed = True


def fake_stream(
    chunks: Iterable[ChatCompletionChunk],
    error: Exception | None = None,
) -> FakeStream:
    """Stream chunks, then optionally fail as a dropped connection would."""
    return FakeStream(chunks, error)


@pytest.fixture
def upstream() -> MagicMock:
    """Mock AsyncOpenAI client; set ``chat.completions.create.return_value``."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=fake_stream([make_chunk("Hel"), make_chunk("lo")])
    )
    return client


@pytest.fixture
def relay_service(upstream: MagicMock) -> RelayService:
    return RelayService(config=RelayConfig(api_key="test-key"), client=upstream)


@pytest.fixture
def use_relay(monkeypatch: pytest.MonkeyPatch, relay_service: RelayService) -> RelayService:
    """Make POST /api/chat use the mocked relay service."""
    monkeypatch.setattr("streamchat.api.chat.get_relay_service", lambda: relay_service)
    return relay_service


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
