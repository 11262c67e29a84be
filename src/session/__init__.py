"""Session orchestration - the state behind the session window.

Tracks the active mode, the lifecycle of each remote operation and the
ordering rules between user actions and network replies.

Components:
    - TabController: active tab and the tab activation event
    - ChatSession: transcript and the single in-flight chat query
    - InspectionViewer: latest vector store snapshot, loading and error
    - IngestUploader: folder selection and batch upload status
    - SessionController: composes the above around one state

Runs on a single asyncio loop. No locks, only interleaved callbacks.
"""

from src.session.chat import ChatSession
from src.session.controller import SessionController
from src.session.ingest import (
    FolderSelectionError,
    IngestUploader,
    InvalidTransitionError,
    collect_folder,
)
from src.session.inspection import InspectionViewer
from src.session.tabs import TabController
from src.session.tasks import BackgroundTasks

__all__ = [
    "BackgroundTasks",
    "ChatSession",
    "FolderSelectionError",
    "IngestUploader",
    "InspectionViewer",
    "InvalidTransitionError",
    "SessionController",
    "TabController",
    "collect_folder",
]
