"""Photo persistence interface and live listing subscriptions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol
from uuid import UUID, uuid4

from event_gallery.domain.photos import PhotoRecord, PhotoStatus

_logger = logging.getLogger(__name__)

PhotoListener = Callable[[list[PhotoRecord]], None]


class PhotoRepository(Protocol):
    """Persistence interface for photo records."""

    def create_photo(  # noqa: PLR0913
        self,
        event_id: UUID,
        agency_id: str,
        original_url: str,
        display_url: str,
        status: PhotoStatus,
        created_at: datetime,
    ) -> PhotoRecord:
        """Create a photo with an empty descriptor and return it."""

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo by id, if present."""

    def list_photos(
        self, event_id: UUID, status: PhotoStatus | None = None
    ) -> list[PhotoRecord]:
        """Return photos of an event, optionally restricted to one status."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo record."""


@dataclass
class PhotoListingHub:
    """Pushes an event's photo listing to subscribers whenever it changes."""

    repository: PhotoRepository
    _listeners: dict[UUID, tuple[UUID, PhotoListener]] = field(
        default_factory=dict, init=False, repr=False
    )

    def subscribe(self, event_id: UUID, listener: PhotoListener) -> UUID:
        """Register a listener and send it the current listing."""
        token = uuid4()
        self._listeners[token] = (event_id, listener)
        listener(self.repository.list_photos(event_id))
        return token

    def unsubscribe(self, token: UUID) -> None:
        self._listeners.pop(token, None)

    def subscriber_count(self, event_id: UUID) -> int:
        return sum(1 for target, _ in self._listeners.values() if target == event_id)

    def publish(self, event_id: UUID) -> None:
        """Re-read the event's photos and notify its subscribers."""
        listeners = [
            listener
            for target, listener in list(self._listeners.values())
            if target == event_id
        ]
        if not listeners:
            return
        try:
            photos = self.repository.list_photos(event_id)
        except Exception:
            _logger.exception(
                "Failed to refresh photo listing", extra={"event_id": event_id}
            )
            return
        for listener in listeners:
            try:
                listener(photos)
            except Exception:
                _logger.exception(
                    "Photo listing listener failed", extra={"event_id": event_id}
                )
