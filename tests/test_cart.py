"""Tests for the attendee cart."""

from dataclasses import replace
from decimal import Decimal

from event_gallery.domain.cart import PurchaseTier
from event_gallery.services.cart import Cart
from tests.conftest import make_event, make_photo


def test_add_photo_uses_event_price_and_label() -> None:
    event = make_event()
    photo = make_photo(event.id)
    cart = Cart()

    item = cart.add_photo(event, photo, PurchaseTier.SOCIAL)

    assert item.unit_price == Decimal("0.99")
    assert item.label == "Social Download"
    assert item.thumbnail_url == photo.display_url
    assert cart.item_count == 1


def test_remix_tier_uses_credit_price() -> None:
    event = make_event()
    cart = Cart()

    item = cart.add_photo(event, make_photo(event.id), PurchaseTier.REMIX)

    assert item.unit_price == Decimal("1.00")
    assert item.label == "AI Remix Credit"


def test_same_photo_and_tier_is_not_added_twice() -> None:
    event = make_event()
    photo = make_photo(event.id)
    cart = Cart()

    cart.add_photo(event, photo, PurchaseTier.PRINT)
    cart.add_photo(event, photo, PurchaseTier.PRINT)
    cart.add_photo(event, photo, PurchaseTier.ORIGINAL)

    assert cart.item_count == 2
    assert cart.total == Decimal("29.98")


def test_price_is_captured_when_added() -> None:
    event = make_event()
    photo = make_photo(event.id)
    cart = Cart()
    cart.add_photo(event, photo, PurchaseTier.PRINT)

    repriced = replace(
        event, pricing=replace(event.pricing, print_price=Decimal("12.00"))
    )
    cart.add_photo(repriced, make_photo(event.id), PurchaseTier.PRINT)

    assert [item.unit_price for item in cart.items] == [
        Decimal("9.99"),
        Decimal("12.00"),
    ]


def test_remove_and_clear() -> None:
    event = make_event()
    photo = make_photo(event.id)
    cart = Cart()
    cart.add_photo(event, photo, PurchaseTier.SOCIAL)
    cart.add_photo(event, photo, PurchaseTier.PRINT)

    cart.remove(photo.id, PurchaseTier.SOCIAL)
    assert [item.tier for item in cart.items] == [PurchaseTier.PRINT]

    cart.clear()
    assert cart.item_count == 0
    assert cart.total == Decimal("0")


def test_checkout_returns_items_and_empties_cart() -> None:
    event = make_event()
    cart = Cart()
    cart.add_photo(event, make_photo(event.id), PurchaseTier.ORIGINAL)

    purchased = cart.complete_checkout()

    assert [item.unit_price for item in purchased] == [Decimal("19.99")]
    assert cart.items == []
