"""Integration tests for the relay endpoint and client working together.

Coverage:
    - POST /api/chat status codes, headers and streamed bodies
    - ConversationClient round trips through the real application
"""
