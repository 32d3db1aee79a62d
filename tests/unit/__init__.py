"""Unit tests for individual components in isolation.

Coverage:
    - relay/: Configuration, delta extraction and stream truncation
    - ui/: State transitions, markdown rendering and the streaming client
"""
