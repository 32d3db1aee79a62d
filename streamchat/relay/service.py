"""Upstream inference client for the chat relay.

Wraps the OpenAI SDK's async client pointed at an OpenAI-compatible
provider. Opening a stream is split from consuming it so that setup
failures (bad credential, unreachable host) surface before the HTTP layer
has committed to a streaming response.

Architecture Decisions:

1. **Two-phase streaming** - ``open_stream`` awaits the completion call and
   returns the raw upstream stream; ``iter_deltas`` turns it into text. The
   endpoint can still answer 500 if the first phase raises.

2. **Stateless singleton** - The service holds only the configured SDK client.
   Nothing is shared between requests, so one instance serves every caller.

3. **Truncate on mid-stream failure** - Once bytes are on the wire there is no
   status code left to change. ``iter_deltas`` logs the error and stops, and
   the downstream response simply ends. The upstream response is closed
   in every case.
"""

import logging
from collections.abc import AsyncGenerator, Sequence
from typing import Any

from openai import AsyncOpenAI, AsyncStream
from openai.types.chat import ChatCompletionChunk

from streamchat.models.schemas import ChatMessage
from streamchat.relay.config import RelayConfig, get_relay_config

logger = logging.getLogger(__name__)


def extract_delta(chunk: Any) -> str:
    """Return the incremental text carried by one upstream fragment.

    Fragments without choices, without a delta or with ``None`` content
    contribute an empty string.
    """
    choices = getattr(chunk, "choices", None)
    if not choices:
        return ""
    delta = getattr(choices[0], "delta", None)
    if delta is None:
        return ""
    return getattr(delta, "content", None) or ""


class RelayService:
    """Service for streaming chat completions from the upstream provider.

    Wraps AsyncOpenAI with:
    - Fixed model and temperature from RelayConfig
    - One upstream call per relayed request, no retries
    - Fragment-to-text extraction for the chunked endpoint
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
            client: Optional pre-built SDK client, mainly for tests.
        """
        self._config = config or get_relay_config()
        self._client = client or self._create_client()

    def _create_client(self) -> AsyncOpenAI:
        """Create the OpenAI SDK client for the configured provider.

        Returns:
            AsyncOpenAI client bound to the provider base URL.
        """
        return AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
        )

    @property
    def config(self) -> RelayConfig:
        return self._config

    async def open_stream(
        self, messages: Sequence[ChatMessage]
    ) -> AsyncStream[ChatCompletionChunk]:
        """Start a streaming chat completion for the conversation.

        Args:
            messages: Conversation history, oldest first.

        Returns:
            The upstream fragment stream.

        Raises:
            openai.OpenAIError: If the provider rejects or cannot be reached.
        """
        return await self._client.chat.completions.create(
            model=self._config.model_name,
            messages=[message.model_dump() for message in messages],
            stream=True,
            temperature=self._config.temperature,
        )

    async def iter_deltas(
        self, stream: AsyncStream[ChatCompletionChunk]
    ) -> AsyncGenerator[str]:
        """Yield the text delta of every upstream fragment, in arrival order.

        One fragment in, one string out; fragments without text yield ``""``.
        An upstream error after streaming has begun is logged and ends the
        generator. The upstream response is closed however the generator
        ends, including when the downstream client disconnects.

        Args:
            stream: Stream returned by ``open_stream``.

        Yields:
            Text deltas as they arrive.
        """
        count = 0
        try:
            async for chunk in stream:
                count += 1
                yield extract_delta(chunk)
        except Exception:
            logger.exception(f"Upstream stream failed after {count} fragments; truncating")
            return
        finally:
            await stream.close()
        logger.debug(f"Upstream stream finished after {count} fragments")


# Module-level singleton instance
_relay_service: RelayService | None = None


def get_relay_service() -> RelayService:
    """Get or create the global relay service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The RelayService instance.

    Raises:
        pydantic.ValidationError: If no API key is configured.
    """
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService()
    return _relay_service
