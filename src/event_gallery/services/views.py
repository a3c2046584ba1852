"""Attendee gallery view state."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from event_gallery.domain.events import EventRecord
from event_gallery.domain.photos import PhotoRecord
from event_gallery.services.matching import GalleryFilter


@dataclass
class GalleryView:
    """Photos of one event, loaded once, plus the currently visible subset."""

    id: UUID
    event: EventRecord
    photos: list[PhotoRecord]
    visible: list[PhotoRecord] = field(default_factory=list)
    fallback: bool = False
    last_active_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        if not self.visible:
            self.visible = list(self.photos)

    @property
    def filtered(self) -> bool:
        """Whether a search currently hides part of the gallery."""
        return len(self.visible) != len(self.photos)

    def touch(self) -> None:
        self.last_active_at = datetime.now(tz=UTC)

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        for photo in self.photos:
            if photo.id == photo_id:
                return photo
        return None

    def show(self, result: GalleryFilter) -> None:
        """Display the outcome of a face search."""
        self.visible = list(result.photos)
        self.fallback = result.fallback

    def reset(self) -> None:
        """Show every photo again."""
        self.visible = list(self.photos)
        self.fallback = False
