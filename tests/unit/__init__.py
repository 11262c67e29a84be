"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and payload parsing
    - client/: Configuration loading
    - session/: Tab, chat, inspection and ingest state machines

Uses the in-memory FakeBackend. Requests can be held open to observe
pending windows and out-of-order replies.
"""
