"""Attendee gallery resolution and view lifecycle."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from event_gallery.domain.errors import EventNotFoundError, GalleryViewNotFoundError
from event_gallery.domain.events import EventRecord
from event_gallery.domain.photos import PhotoStatus
from event_gallery.services.capture import CameraDevice, CaptureSession
from event_gallery.services.events import EventRepository
from event_gallery.services.extraction import FaceExtractionService
from event_gallery.services.listing import PhotoRepository
from event_gallery.services.matching import FaceMatcher
from event_gallery.services.views import GalleryView

_logger = logging.getLogger(__name__)


@dataclass
class GalleryService:
    """Resolves events and keeps one capture session per open gallery view.

    Views untouched for ``view_ttl`` are closed on the next lookup or open,
    which also releases a camera an abandoned search still holds.
    """

    event_repository: EventRepository
    photo_repository: PhotoRepository
    camera: CameraDevice
    extraction_service: FaceExtractionService
    matcher: FaceMatcher
    view_ttl: timedelta = timedelta(minutes=15)
    _views: dict[UUID, GalleryView] = field(default_factory=dict, init=False)
    _sessions: dict[UUID, CaptureSession] = field(default_factory=dict, init=False)

    def resolve_event(
        self, event_id: UUID | None = None, event_slug: str | None = None
    ) -> EventRecord:
        """Resolve an event by slug or id; a missing event is terminal."""
        if event_slug:
            matches = self.event_repository.find_by_slug(event_slug)
            if not matches:
                _logger.info("Event not found by slug: %s", event_slug)
                raise EventNotFoundError(event_slug)
            event_id = matches[0].id
        if event_id is None:
            raise EventNotFoundError("No event id or slug given")
        event = self.event_repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def open_view(
        self, event_id: UUID | None = None, event_slug: str | None = None
    ) -> GalleryView:
        """Resolve the event and cache its active photos for the view."""
        self.evict_idle()
        event = self.resolve_event(event_id=event_id, event_slug=event_slug)
        photos = self.photo_repository.list_photos(event.id, status=PhotoStatus.ACTIVE)
        view = GalleryView(id=uuid4(), event=event, photos=photos)
        self._views[view.id] = view
        self._sessions[view.id] = CaptureSession(
            camera=self.camera,
            extraction_service=self.extraction_service,
            matcher=self.matcher,
            view=view,
        )
        return view

    def get_view(self, view_id: UUID) -> GalleryView:
        self.evict_idle()
        view = self._views.get(view_id)
        if view is None:
            raise GalleryViewNotFoundError(str(view_id))
        view.touch()
        return view

    def get_session(self, view_id: UUID) -> CaptureSession:
        self.evict_idle()
        session = self._sessions.get(view_id)
        if session is None:
            raise GalleryViewNotFoundError(str(view_id))
        session.view.touch()
        return session

    def close_view(self, view_id: UUID) -> None:
        """Drop a view, releasing its camera if a search is still open."""
        session = self._sessions.get(view_id)
        if session is None:
            raise GalleryViewNotFoundError(str(view_id))
        session.cancel()
        self._views.pop(view_id, None)
        self._sessions.pop(view_id, None)

    def evict_idle(self, now: datetime | None = None) -> int:
        """Close every view that has been idle longer than the TTL."""
        cutoff = (now or datetime.now(tz=UTC)) - self.view_ttl
        idle = [
            view_id
            for view_id, view in self._views.items()
            if view.last_active_at < cutoff
        ]
        for view_id in idle:
            self.close_view(view_id)
        if idle:
            _logger.info("Closed %s idle gallery views", len(idle))
        return len(idle)

    def close_all(self) -> None:
        for view_id in list(self._sessions):
            self.close_view(view_id)
