"""Domain models for gallery photos."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

Descriptor = tuple[float, ...]


class PhotoStatus(str, Enum):
    """Lifecycle status of a photo."""

    ACTIVE = "active"
    REMOVED = "removed"


@dataclass(frozen=True)
class PhotoRecord:
    """Represents a photo belonging to one event."""

    id: UUID
    event_id: UUID
    agency_id: str
    original_url: str
    display_url: str
    descriptor: Descriptor | None
    status: PhotoStatus
    created_at: datetime | None = None

    @property
    def has_descriptor(self) -> bool:
        """Whether the embedding pipeline has processed this photo."""
        return bool(self.descriptor)
