"""Pydantic request models and response serializers for the HTTP API."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from event_gallery.domain.cart import CartLineItem, PurchaseTier
from event_gallery.domain.events import EventRecord, PricingSchedule
from event_gallery.domain.ingestion import QueueEntry
from event_gallery.domain.photos import PhotoRecord
from event_gallery.services.capture import CaptureOutcome
from event_gallery.services.views import GalleryView


class OpenViewRequest(BaseModel):
    """Gallery view request by event id or by agency and event slug."""

    event_id: UUID | None = None
    agency_slug: str | None = None
    event_slug: str | None = None


class AddToCartRequest(BaseModel):
    """Purchase action on a photo card."""

    photo_id: UUID
    tier: PurchaseTier


class PricingPayload(BaseModel):
    """Four-tier event pricing."""

    social_price: Decimal = Field(ge=0)
    print_price: Decimal = Field(ge=0)
    original_price: Decimal = Field(ge=0)
    credit_price: Decimal = Field(ge=0)

    def to_schedule(self) -> PricingSchedule:
        return PricingSchedule(
            social_price=self.social_price,
            print_price=self.print_price,
            original_price=self.original_price,
            credit_price=self.credit_price,
        )


class CreateEventRequest(BaseModel):
    """Operator request to create an event."""

    agency_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    date: str
    slug: str | None = None
    pricing: PricingPayload | None = None


def serialize_pricing(pricing: PricingSchedule) -> dict[str, str]:
    return {
        "social_price": str(pricing.social_price),
        "print_price": str(pricing.print_price),
        "original_price": str(pricing.original_price),
        "credit_price": str(pricing.credit_price),
    }


def serialize_event(event: EventRecord) -> dict[str, object]:
    return {
        "id": str(event.id),
        "agency_id": event.agency_id,
        "name": event.name,
        "slug": event.slug,
        "date": event.date,
        "pricing": serialize_pricing(event.pricing),
    }


def serialize_gallery_photo(photo: PhotoRecord) -> dict[str, object]:
    """Attendee-facing photo card; only the degraded rendering is exposed."""
    return {"id": str(photo.id), "display_url": photo.display_url}


def serialize_operator_photo(photo: PhotoRecord) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "event_id": str(photo.event_id),
        "original_url": photo.original_url,
        "display_url": photo.display_url,
        "status": photo.status.value,
        "has_descriptor": photo.has_descriptor,
        "created_at": photo.created_at.isoformat() if photo.created_at else None,
    }


def serialize_view(view: GalleryView) -> dict[str, object]:
    return {
        "id": str(view.id),
        "event": serialize_event(view.event),
        "photos": [serialize_gallery_photo(photo) for photo in view.visible],
        "total_photos": len(view.photos),
        "filtered": view.filtered,
        "fallback": view.fallback,
    }


def serialize_outcome(outcome: CaptureOutcome, view: GalleryView) -> dict[str, object]:
    notice = outcome.notice
    result = outcome.result
    return {
        "status": outcome.status.value,
        "filtered": outcome.filtered,
        "notice": {"kind": notice.kind.value, "text": notice.text} if notice else None,
        "matched": result.matched if result else None,
        "view": serialize_view(view),
    }


def serialize_line_item(item: CartLineItem) -> dict[str, object]:
    return {
        "photo_id": str(item.photo_id),
        "tier": item.tier.value,
        "unit_price": str(item.unit_price),
        "label": item.label,
        "thumbnail_url": item.thumbnail_url,
    }


def serialize_queue_entry(entry: QueueEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "event_id": str(entry.event_id),
        "file_name": entry.file_name,
        "status": entry.status.value,
        "storage_path": entry.storage_path,
        "photo_id": str(entry.photo_id) if entry.photo_id else None,
        "error": entry.error,
        "updated_at": entry.updated_at.isoformat(),
    }
