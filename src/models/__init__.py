"""Pydantic models shared by the session components.

Provides type safety and validation for the data exchanged with the backend.

Models:
    - Tab: Active mode of the session window
    - Message: Transcript entry (user or agent)
    - RecordSet: Index-aligned snapshot of the vector store
    - IngestStatus: Lifecycle of a batch upload
    - SelectedFile: One entry of a folder selection
"""

from src.models.schemas import (
    IngestPhase,
    IngestStatus,
    Message,
    RecordRow,
    RecordSet,
    Role,
    SelectedFile,
    Tab,
)

__all__ = [
    "IngestPhase",
    "IngestStatus",
    "Message",
    "RecordRow",
    "RecordSet",
    "Role",
    "SelectedFile",
    "Tab",
]
