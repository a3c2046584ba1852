"""Domain models for events and their pricing."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from event_gallery.domain.cart import PurchaseTier


@dataclass(frozen=True)
class PricingSchedule:
    """Per-tier prices for an event."""

    social_price: Decimal
    print_price: Decimal
    original_price: Decimal
    credit_price: Decimal

    def price_for(self, tier: PurchaseTier) -> Decimal:
        """Return the current price of a purchase tier."""
        prices = {
            PurchaseTier.SOCIAL: self.social_price,
            PurchaseTier.PRINT: self.print_price,
            PurchaseTier.ORIGINAL: self.original_price,
            PurchaseTier.REMIX: self.credit_price,
        }
        return prices[tier]


@dataclass(frozen=True)
class EventRecord:
    """Represents an event stored in the gallery store."""

    id: UUID
    agency_id: str
    name: str
    slug: str | None
    date: str
    pricing: PricingSchedule
