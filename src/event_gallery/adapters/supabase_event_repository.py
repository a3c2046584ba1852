"""Supabase-backed event repository."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from supabase import Client

from event_gallery.domain.events import EventRecord, PricingSchedule
from event_gallery.services.events import EventRepository

_COLUMNS = "id, agency_id, name, slug, date, pricing"


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase implementation for event persistence."""

    client: Client
    default_pricing: PricingSchedule

    def get_event(self, event_id: UUID) -> EventRecord | None:
        """Return an event by id, if present."""
        response = (
            self.client.table("events")
            .select(_COLUMNS)
            .eq("id", str(event_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self._to_record(response.data[0])

    def find_by_slug(self, slug: str) -> list[EventRecord]:
        """Return events with the given slug."""
        response = (
            self.client.table("events").select(_COLUMNS).eq("slug", slug).execute()
        )
        return [self._to_record(row) for row in response.data or []]

    def create_event(  # noqa: PLR0913
        self,
        agency_id: str,
        name: str,
        slug: str,
        date: str,
        pricing: PricingSchedule,
    ) -> EventRecord:
        """Create an event row and return it."""
        response = (
            self.client.table("events")
            .insert(
                {
                    "agency_id": agency_id,
                    "name": name,
                    "slug": slug,
                    "date": date,
                    "pricing": _pricing_to_row(pricing),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create event")
        return self._to_record(response.data[0])

    def update_pricing(self, event_id: UUID, pricing: PricingSchedule) -> None:
        """Replace the pricing JSON of an event."""
        self.client.table("events").update(
            {"pricing": _pricing_to_row(pricing)}
        ).eq("id", str(event_id)).execute()

    def _to_record(self, row: dict[str, object]) -> EventRecord:
        return EventRecord(
            id=UUID(str(row["id"])),
            agency_id=str(row["agency_id"]),
            name=str(row["name"]),
            slug=row.get("slug"),
            date=str(row.get("date") or ""),
            pricing=_pricing_from_row(row.get("pricing"), self.default_pricing),
        )


def _pricing_to_row(pricing: PricingSchedule) -> dict[str, str]:
    return {
        "social_price": str(pricing.social_price),
        "print_price": str(pricing.print_price),
        "original_price": str(pricing.original_price),
        "credit_price": str(pricing.credit_price),
    }


def _pricing_from_row(raw: object, default: PricingSchedule) -> PricingSchedule:
    """Read stored pricing, keeping defaults for missing tiers."""
    if not isinstance(raw, dict):
        return default

    def _amount(key: str, fallback: Decimal) -> Decimal:
        value = raw.get(key)
        return Decimal(str(value)) if value is not None else fallback

    return PricingSchedule(
        social_price=_amount("social_price", default.social_price),
        print_price=_amount("print_price", default.print_price),
        original_price=_amount("original_price", default.original_price),
        credit_price=_amount("credit_price", default.credit_price),
    )
