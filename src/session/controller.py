"""Session controller composing the four session components.

One controller exists per open session window. It owns the components, the
background tasks they spawn, and the backend client, and exposes the user
operations: switching tabs, sending a chat message and uploading files.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from src.client.backend import BackendClient
from src.client.config import ClientConfig
from src.models.schemas import SelectedFile, Tab
from src.session.chat import ChatSession
from src.session.ingest import IngestUploader
from src.session.inspection import InspectionViewer
from src.session.tabs import TabController
from src.session.tasks import BackgroundTasks

logger = logging.getLogger(__name__)


class SessionController:
    """Single owner of the session state.

    Components do not reference each other. The inspection viewer listens to
    tab activations, and the uploader gets the tab switch as a callable.

    Args:
        backend: Client for the backend endpoints. Closed with the session.
        auto_navigate_delay: Seconds before returning to chat after an upload.
    """

    def __init__(self, backend: BackendClient, auto_navigate_delay: float = 1.5) -> None:
        self._backend = backend
        self.tasks = BackgroundTasks()
        self.tabs = TabController()
        self.chat = ChatSession(backend)
        self.inspection = InspectionViewer(backend, self.tasks.spawn)
        self.ingest = IngestUploader(
            backend,
            self.tasks.spawn,
            self.switch_tab,
            auto_navigate_delay=auto_navigate_delay,
        )
        self.tabs.subscribe(self.inspection.on_tab_activated)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "SessionController":
        backend = BackendClient(config.api_base_url, timeout=config.request_timeout)
        return cls(backend, auto_navigate_delay=config.auto_navigate_delay)

    @property
    def active_tab(self) -> Tab:
        return self.tabs.active

    @property
    def closed(self) -> bool:
        return self.tasks.closed

    def switch_tab(self, target: Tab | str) -> None:
        if self.closed:
            logger.debug(f"Ignoring tab switch to {target}: session closed")
            return
        self.tabs.switch_tab(target)

    async def send_message(self, text: str | None = None) -> bool:
        if self.closed:
            return False
        return await self.chat.send_message(text)

    async def upload_files(self, files: Sequence[SelectedFile]) -> bool:
        if self.closed:
            return False
        return await self.ingest.upload_files(files)

    async def select_folder(self, path: str | Path) -> bool:
        if self.closed:
            return False
        return await self.ingest.select_folder(path)

    async def wait_idle(self) -> None:
        """Wait for pending background work (inspection fetches, timers)."""
        await self.tasks.wait_idle()

    async def close(self) -> None:
        """Cancel scheduled work and release the HTTP client."""
        if self.closed:
            return
        logger.info("Closing session")
        await self.tasks.close()
        await self._backend.aclose()
