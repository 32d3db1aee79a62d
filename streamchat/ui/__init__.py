"""Chat client - conversation state, streaming reader and NiceGUI page.

Responsibilities:
    - Conversation state machine (idle, streaming, finalizing)
    - Incremental reading of the relay's chunked response
    - Markdown rendering with highlighted code blocks

The page module is imported separately so that the state machine and
client can be used without starting NiceGUI.
"""
