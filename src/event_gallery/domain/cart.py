"""Domain models for cart line items."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID


class PurchaseTier(str, Enum):
    """Purchasable variants of a gallery photo."""

    SOCIAL = "social"
    PRINT = "print"
    ORIGINAL = "original"
    REMIX = "remix"


TIER_LABELS: dict[PurchaseTier, str] = {
    PurchaseTier.SOCIAL: "Social Download",
    PurchaseTier.PRINT: "Print",
    PurchaseTier.ORIGINAL: "Original File",
    PurchaseTier.REMIX: "AI Remix Credit",
}


@dataclass(frozen=True)
class CartLineItem:
    """Line item with the price captured when it was added."""

    photo_id: UUID
    tier: PurchaseTier
    unit_price: Decimal
    label: str
    thumbnail_url: str
