"""Attendee cart shared across gallery views."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from event_gallery.domain.cart import TIER_LABELS, CartLineItem, PurchaseTier
from event_gallery.domain.events import EventRecord
from event_gallery.domain.photos import PhotoRecord

_logger = logging.getLogger(__name__)


@dataclass
class Cart:
    """Process-wide cart, emptied only by checkout or an explicit clear."""

    items: list[CartLineItem] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total(self) -> Decimal:
        return sum((item.unit_price for item in self.items), Decimal("0"))

    def add_photo(
        self, event: EventRecord, photo: PhotoRecord, tier: PurchaseTier
    ) -> CartLineItem:
        """Add a photo at the event's current price for the tier."""
        for item in self.items:
            if item.photo_id == photo.id and item.tier is tier:
                return item
        item = CartLineItem(
            photo_id=photo.id,
            tier=tier,
            unit_price=event.pricing.price_for(tier),
            label=TIER_LABELS[tier],
            thumbnail_url=photo.display_url,
        )
        self.items.append(item)
        return item

    def remove(self, photo_id: UUID, tier: PurchaseTier) -> None:
        self.items = [
            item
            for item in self.items
            if not (item.photo_id == photo_id and item.tier is tier)
        ]

    def clear(self) -> None:
        self.items = []

    def complete_checkout(self) -> list[CartLineItem]:
        """Hand the items off for payment and start a fresh cart."""
        purchased = list(self.items)
        _logger.info(
            "Checkout completed: %s items, total=%s", len(purchased), self.total
        )
        self.items = []
        return purchased
