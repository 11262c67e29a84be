"""Test package for the CodeIntel session client.

Structure:
    - unit/: Session components against an in-memory backend double
    - integration/: Real BackendClient against a fake FastAPI backend
    - fakes.py: Backend doubles shared by both

Leverages pytest with pytest-asyncio and pytest-check for soft assertions.
"""
