"""streamchat - a minimal streaming chat interface for hosted LLM inference.

Relays a conversation to an OpenAI-compatible chat-completions API and
streams the model's answer back to a browser chat page token by token.

Components:
    - api: HTTP endpoints and the chunked text relay
    - relay: Upstream inference client and fragment extraction
    - ui: Conversation state machine, streaming client and chat page
    - models: Message and request schemas
"""

__version__ = "0.1.0"
