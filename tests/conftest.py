"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_backend: In-memory backend double for unit tests
    - tasks: Background task set, closed after the test
    - backend_state: Behaviour switches of the fake FastAPI backend
    - backend_client: Real BackendClient routed to the fake FastAPI backend
    - sample_project: Small on-disk project folder
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport

from src.client.backend import BackendClient
from src.session.tasks import BackgroundTasks
from tests.fakes import BackendState, FakeBackend, create_backend_app


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Return a fresh in-memory backend double."""
    return FakeBackend()


@pytest.fixture
async def tasks() -> AsyncGenerator[BackgroundTasks]:
    """Yield a task set that is closed after the test."""
    background = BackgroundTasks()
    yield background
    await background.close()


@pytest.fixture
def backend_state() -> BackendState:
    """Return default behaviour for the fake FastAPI backend."""
    return BackendState()


@pytest.fixture
async def backend_client(backend_state: BackendState) -> AsyncGenerator[BackendClient]:
    """Create a BackendClient talking to the fake backend over ASGI.

    Yields:
        BackendClient whose requests never leave the process.
    """
    transport = ASGITransport(app=create_backend_app(backend_state))
    async with BackendClient("http://test", transport=transport) as client:
        yield client


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Create a project folder with nested sources.

    Returns:
        Path to the ``project`` folder.
    """
    root = tmp_path / "project"
    (root / "src" / "app").mkdir(parents=True)
    (root / "README.md").write_text("# Sample\n")
    (root / "src" / "Main.java").write_text("class Main {}\n")
    (root / "src" / "app" / "Service.java").write_text("class Service {}\n")
    return root
