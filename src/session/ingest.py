"""Folder ingestion: selection, batch upload and status banner.

Status lifecycle::

    Idle -> Uploading -> Succeeded -> Idle   (after the auto-navigation delay)
                      -> Failed    -> Idle   (on acknowledge or next upload)

Only one upload runs at a time; the "Choose Folder" control is disabled
while Uploading.
"""

import asyncio
import logging
import mimetypes
from collections.abc import Callable, Sequence
from pathlib import Path

from src.client.backend import BackendClient, BackendError
from src.models.schemas import IngestPhase, IngestStatus, SelectedFile, Tab
from src.session.tasks import Spawn

logger = logging.getLogger(__name__)

AUTO_NAVIGATE_DELAY = 1.5

_ALLOWED_TRANSITIONS: dict[IngestPhase, set[IngestPhase]] = {
    IngestPhase.IDLE: {IngestPhase.UPLOADING},
    IngestPhase.UPLOADING: {IngestPhase.SUCCEEDED, IngestPhase.FAILED},
    IngestPhase.SUCCEEDED: {IngestPhase.IDLE},
    IngestPhase.FAILED: {IngestPhase.IDLE},
}


class FolderSelectionError(Exception):
    """Raised when a local folder cannot be used as an upload selection."""

    pass


class InvalidTransitionError(Exception):
    """Raised on an upload status change outside the lifecycle."""

    pass


def collect_folder(path: str | Path) -> list[SelectedFile]:
    """Read every file below a folder, as a directory picker would.

    Relative paths start with the folder's own name, so selecting
    ``/home/me/project`` yields entries like ``project/src/Main.java``.

    Args:
        path: Folder to read.

    Returns:
        Selected files in sorted path order.

    Raises:
        FolderSelectionError: If the path is missing, not a directory, or
            a file below it cannot be read.
    """
    root = Path(path).expanduser()
    if not root.is_dir():
        raise FolderSelectionError(f"Not a directory: {root}")

    base = root.resolve().parent
    selection: list[SelectedFile] = []
    try:
        for file_path in sorted(p for p in root.resolve().rglob("*") if p.is_file()):
            content_type, _ = mimetypes.guess_type(file_path.name)
            selection.append(
                SelectedFile(
                    relative_path=file_path.relative_to(base).as_posix(),
                    content=file_path.read_bytes(),
                    content_type=content_type or "application/octet-stream",
                )
            )
    except OSError as e:
        raise FolderSelectionError(f"Cannot read folder {root}: {e}") from e
    logger.info(f"Collected {len(selection)} files from {root}")
    return selection


class IngestUploader:
    """Owns the upload status and the current file selection.

    Args:
        backend: Backend client used for the upload.
        spawn: Schedules background coroutines for the session.
        switch_tab: Capability to change the active tab.
        auto_navigate_delay: Seconds before returning to chat after success.
    """

    def __init__(
        self,
        backend: BackendClient,
        spawn: Spawn,
        switch_tab: Callable[[Tab], None],
        auto_navigate_delay: float = AUTO_NAVIGATE_DELAY,
    ) -> None:
        self._backend = backend
        self._spawn = spawn
        self._switch_tab = switch_tab
        self._delay = auto_navigate_delay
        self._navigation: asyncio.Task | None = None
        self.status: IngestStatus = IngestStatus.idle()
        self.selection: list[SelectedFile] = []

    @property
    def can_choose(self) -> bool:
        """Whether the folder chooser is enabled."""
        return self.status.phase is not IngestPhase.UPLOADING

    def _set_status(self, status: IngestStatus) -> None:
        if status.phase not in _ALLOWED_TRANSITIONS[self.status.phase]:
            raise InvalidTransitionError(
                f"Cannot go from {self.status.phase.value} to {status.phase.value}"
            )
        self.status = status

    def acknowledge(self) -> None:
        """Dismiss a Succeeded or Failed banner."""
        if self.status.phase in (IngestPhase.SUCCEEDED, IngestPhase.FAILED):
            self._set_status(IngestStatus.idle())

    async def select_folder(self, path: str | Path) -> bool:
        """Select a local folder and upload its contents.

        The folder is read in a worker thread so the event loop keeps
        serving the page while large projects load.

        Raises:
            FolderSelectionError: If the path is not a readable folder.
        """
        if not self.can_choose:
            return False
        self.selection = await asyncio.to_thread(collect_folder, path)
        return await self.upload_files(self.selection)

    async def upload_files(self, files: Sequence[SelectedFile]) -> bool:
        """Upload a selection for ingestion.

        Args:
            files: Files to send, in selection order.

        Returns:
            True if an upload was issued, False for an empty selection or
            while another upload is running.
        """
        if not files:
            return False
        if not self.can_choose:
            logger.warning("Ignoring upload while another one is running")
            return False

        self._cancel_navigation()
        self.acknowledge()
        self._set_status(IngestStatus.uploading())
        logger.info(f"Uploading {len(files)} files for ingestion")

        try:
            message = await self._backend.upload_batch(list(files))
        except BackendError as e:
            logger.warning(f"Upload failed: {e.description}")
            self._set_status(IngestStatus.failed(f"Error: {e.description}"))
        else:
            logger.info(f"Upload succeeded: {message}")
            self._set_status(IngestStatus.succeeded(message))
            self._navigation = self._spawn(self._navigate_to_chat(), "ingest-auto-navigate")
        finally:
            self.selection = []
        return True

    async def _navigate_to_chat(self) -> None:
        await asyncio.sleep(self._delay)
        self._navigation = None
        self.acknowledge()
        self._switch_tab(Tab.CHAT)

    def _cancel_navigation(self) -> None:
        if self._navigation is not None and not self._navigation.done():
            self._navigation.cancel()
        self._navigation = None
