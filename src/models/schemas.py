from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class Tab(str, Enum):
    """Modes of the session window."""

    CHAT = "chat"
    INSPECT = "inspect"
    INGEST = "ingest"


class Role(str, Enum):
    """Speaker of a transcript entry."""

    USER = "user"
    AGENT = "agent"


class Message(BaseModel):
    """A single transcript entry.

    Attributes:
        role: Who produced the message (user or agent).
        content: The message text, stored verbatim.
    """

    role: Role
    content: str


class RecordRow(BaseModel):
    """One rendered row of the vector store inspection table."""

    id: str
    document: str | None = None
    metadata: dict[str, Any] | None = None


class RecordSet(BaseModel):
    """Snapshot of the vector store contents.

    The three sequences are index-aligned: position ``i`` of each one
    describes the same stored record.

    Attributes:
        ids: Record identifiers.
        documents: Text chunk of each record.
        metadatas: Key/value metadata of each record.
    """

    ids: list[str] = Field(default_factory=list)
    documents: list[str | None] = Field(default_factory=list)
    metadatas: list[dict[str, Any] | None] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_aligned(self) -> "RecordSet":
        """Reject sequences of different lengths."""
        sizes = {len(self.ids), len(self.documents), len(self.metadatas)}
        if len(sizes) != 1:
            raise ValueError(
                f"ids, documents and metadatas must have equal length "
                f"(got {len(self.ids)}, {len(self.documents)}, {len(self.metadatas)})"
            )
        return self

    @classmethod
    def from_payload(cls, payload: Any) -> "RecordSet":
        """Build a RecordSet from an inspection endpoint body.

        Anything that is not an object carrying a non-empty ``ids`` array
        means the store holds no data. Missing ``documents`` or
        ``metadatas`` arrays are padded with ``None`` per id.

        Raises:
            pydantic.ValidationError: If ``ids`` is not a list of strings or
                present arrays are misaligned.
        """
        if not isinstance(payload, dict) or not payload.get("ids"):
            return cls()

        ids = payload["ids"]
        size = len(ids) if isinstance(ids, list) else 0
        documents = payload.get("documents")
        metadatas = payload.get("metadatas")
        return cls(
            ids=ids,
            documents=documents if documents is not None else [None] * size,
            metadatas=metadatas if metadatas is not None else [None] * size,
        )

    def __len__(self) -> int:
        return len(self.ids)

    def rows(self) -> list[RecordRow]:
        return [
            RecordRow(id=record_id, document=document, metadata=metadata)
            for record_id, document, metadata in zip(
                self.ids, self.documents, self.metadatas, strict=True
            )
        ]


class IngestPhase(str, Enum):
    """Lifecycle phases of a batch upload."""

    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class IngestStatus(BaseModel):
    """Current upload status shown in the ingest banner.

    Attributes:
        phase: Lifecycle phase.
        message: Banner text (backend reply or error), empty when idle.
    """

    phase: IngestPhase = IngestPhase.IDLE
    message: str = ""

    @classmethod
    def idle(cls) -> "IngestStatus":
        return cls()

    @classmethod
    def uploading(cls) -> "IngestStatus":
        return cls(phase=IngestPhase.UPLOADING, message="Uploading...")

    @classmethod
    def succeeded(cls, message: str) -> "IngestStatus":
        return cls(phase=IngestPhase.SUCCEEDED, message=message)

    @classmethod
    def failed(cls, message: str) -> "IngestStatus":
        return cls(phase=IngestPhase.FAILED, message=message)


class SelectedFile(BaseModel):
    """One file of a folder selection.

    Attributes:
        relative_path: Path including the selected folder name,
            e.g. ``project/src/Main.java``.
        content: Raw file bytes.
        content_type: MIME type sent with the multipart entry.
    """

    relative_path: str = Field(..., min_length=1)
    content: bytes
    content_type: str = "application/octet-stream"
