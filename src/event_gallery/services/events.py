"""Operator-side event management."""

import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from event_gallery.domain.errors import EventNotFoundError
from event_gallery.domain.events import EventRecord, PricingSchedule

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


class EventRepository(Protocol):
    """Persistence interface for events."""

    def get_event(self, event_id: UUID) -> EventRecord | None:
        """Return an event by id, if present."""

    def find_by_slug(self, slug: str) -> list[EventRecord]:
        """Return events whose slug equals the given value."""

    def create_event(  # noqa: PLR0913
        self,
        agency_id: str,
        name: str,
        slug: str,
        date: str,
        pricing: PricingSchedule,
    ) -> EventRecord:
        """Create an event and return it."""

    def update_pricing(self, event_id: UUID, pricing: PricingSchedule) -> None:
        """Replace the pricing schedule of an event."""


@dataclass
class EventService:
    """Application service for operator event actions."""

    repository: EventRepository
    default_pricing: PricingSchedule

    def create_event(  # noqa: PLR0913
        self,
        agency_id: str,
        name: str,
        date: str,
        slug: str | None = None,
        pricing: PricingSchedule | None = None,
    ) -> EventRecord:
        """Create an event, deriving its slug from the name when omitted."""
        return self.repository.create_event(
            agency_id=agency_id,
            name=name,
            slug=slugify(slug or name),
            date=date,
            pricing=pricing or self.default_pricing,
        )

    def get_event(self, event_id: UUID) -> EventRecord:
        event = self.repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def update_pricing(self, event_id: UUID, pricing: PricingSchedule) -> EventRecord:
        """Edit prices; the only mutation allowed on an existing event."""
        self.get_event(event_id)
        self.repository.update_pricing(event_id, pricing)
        return self.get_event(event_id)


def slugify(value: str) -> str:
    """Lowercase a name and join its alphanumeric runs with dashes."""
    slug = _SLUG_STRIP.sub("-", value.strip().lower()).strip("-")
    return slug or "event"
