"""Upstream inference relay.

Streams chat completions from an OpenAI-compatible provider.

Responsibilities:
    - Client construction from the configured credential
    - One streaming completion call per conversation request
    - Extraction of the text delta carried by each fragment

Maintains clean separation from the HTTP layer.
"""

from streamchat.relay.config import RelayConfig, get_relay_config
from streamchat.relay.service import RelayService, extract_delta, get_relay_service

__all__ = [
    "RelayConfig",
    "RelayService",
    "extract_delta",
    "get_relay_config",
    "get_relay_service",
]
