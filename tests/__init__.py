"""Test package for streamchat.

Structure:
    - unit/: State machine, rendering, relay service and client in isolation
    - integration/: The FastAPI app over ASGITransport, alone and with the client

The upstream provider is always mocked; no test needs network access or
an API key.
"""
