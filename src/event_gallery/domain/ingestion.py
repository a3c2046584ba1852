"""Domain models for the upload ingestion queue."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UploadStatus(str, Enum):
    """Coarse per-file upload state."""

    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class UploadedFile:
    """A file submitted by an operator."""

    name: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class QueueEntry:
    """Progress of one file in the ingestion queue."""

    id: UUID
    event_id: UUID
    file_name: str
    status: UploadStatus
    updated_at: datetime
    storage_path: str | None = None
    photo_id: UUID | None = None
    error: str | None = None
