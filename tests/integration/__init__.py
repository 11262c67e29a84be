"""Integration tests for components working together as a system.

Coverage:
    - BackendClient wire format against a fake FastAPI backend
    - Full session journeys from tab switch to rendered state

Requests go through httpx ASGITransport, nothing leaves the process.
"""
