"""Attendee gallery, selfie search and cart endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from event_gallery.api.models import (
    AddToCartRequest,
    OpenViewRequest,
    serialize_line_item,
    serialize_outcome,
    serialize_view,
)
from event_gallery.domain.errors import EventNotFoundError, GalleryViewNotFoundError

if TYPE_CHECKING:
    from event_gallery.containers import AppContainer
    from event_gallery.services.capture import CaptureSession
    from event_gallery.services.views import GalleryView

router = APIRouter(tags=["gallery"])


def _session(request: Request, view_id: UUID) -> tuple[GalleryView, CaptureSession]:
    container: AppContainer = request.app.state.container
    try:
        return (
            container.gallery_service.get_view(view_id),
            container.gallery_service.get_session(view_id),
        )
    except GalleryViewNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Gallery view not found"
        ) from exc


@router.post("/gallery/views", status_code=status.HTTP_201_CREATED)
async def open_view(payload: OpenViewRequest, request: Request) -> dict[str, object]:
    """Resolve an event and open a gallery view over its photos."""
    container: AppContainer = request.app.state.container
    try:
        view = container.gallery_service.open_view(
            event_id=payload.event_id, event_slug=payload.event_slug
        )
    except EventNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        ) from exc
    return serialize_view(view)


@router.get("/gallery/views/{view_id}")
async def get_view(view_id: UUID, request: Request) -> dict[str, object]:
    """Return the currently visible photos of a view."""
    view, _ = _session(request, view_id)
    return serialize_view(view)


@router.delete("/gallery/views/{view_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_view(view_id: UUID, request: Request) -> None:
    """Close a view and release its camera."""
    _session(request, view_id)
    container: AppContainer = request.app.state.container
    container.gallery_service.close_view(view_id)


@router.post("/gallery/views/{view_id}/search/start")
async def start_search(view_id: UUID, request: Request) -> dict[str, object]:
    """Open the camera for a selfie search."""
    view, session = _session(request, view_id)
    return serialize_outcome(await session.start(), view)


@router.post("/gallery/views/{view_id}/search/capture")
async def capture_search(view_id: UUID, request: Request) -> dict[str, object]:
    """Capture a frame and filter the gallery by the detected face."""
    view, session = _session(request, view_id)
    return serialize_outcome(await session.capture(), view)


@router.post("/gallery/views/{view_id}/search/cancel")
async def cancel_search(view_id: UUID, request: Request) -> dict[str, object]:
    """Abort the search and show every photo again."""
    view, session = _session(request, view_id)
    return serialize_outcome(session.cancel(), view)


@router.post("/gallery/views/{view_id}/cart", status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    view_id: UUID, payload: AddToCartRequest, request: Request
) -> dict[str, object]:
    """Add a photo of the view to the cart at the current tier price."""
    view, _ = _session(request, view_id)
    photo = view.get_photo(payload.photo_id)
    if photo is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found"
        )
    container: AppContainer = request.app.state.container
    item = container.cart.add_photo(view.event, photo, payload.tier)
    return serialize_line_item(item)


@router.get("/cart")
async def get_cart(request: Request) -> dict[str, object]:
    """Return cart contents and total."""
    container: AppContainer = request.app.state.container
    return {
        "items": [serialize_line_item(item) for item in container.cart.items],
        "item_count": container.cart.item_count,
        "total": str(container.cart.total),
    }


@router.delete("/cart", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(request: Request) -> None:
    """Empty the cart."""
    container: AppContainer = request.app.state.container
    container.cart.clear()


@router.post("/cart/checkout")
async def checkout(request: Request) -> dict[str, object]:
    """Complete checkout and return the purchased items."""
    container: AppContainer = request.app.state.container
    total = container.cart.total
    purchased = container.cart.complete_checkout()
    return {
        "items": [serialize_line_item(item) for item in purchased],
        "total": str(total),
    }
