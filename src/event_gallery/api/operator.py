"""Operator endpoints for events and photo uploads, with token auth."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Depends,
    File,
    Header,
    HTTPException,
    Request,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from event_gallery.api.models import (
    CreateEventRequest,
    PricingPayload,
    serialize_event,
    serialize_operator_photo,
    serialize_queue_entry,
)
from event_gallery.domain.errors import (
    DeletionNotConfirmedError,
    EventNotFoundError,
    PhotoNotFoundError,
)
from event_gallery.domain.ingestion import UploadedFile

if TYPE_CHECKING:
    from event_gallery.containers import AppContainer
    from event_gallery.domain.photos import PhotoRecord

router = APIRouter(prefix="/operator", tags=["operator"])


def _get_operator_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.operator_token


async def require_operator(
    x_operator_token: str | None = Header(default=None),
    operator_token: str = Depends(_get_operator_token),
) -> None:
    """Ensure requests include a valid operator token."""
    if not x_operator_token or x_operator_token != operator_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _event_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")


@router.post(
    "/events",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_operator)],
)
async def create_event(
    payload: CreateEventRequest, request: Request
) -> dict[str, object]:
    """Create an event with default pricing unless prices are given."""
    container: AppContainer = request.app.state.container
    event = container.event_service.create_event(
        agency_id=payload.agency_id,
        name=payload.name,
        date=payload.date,
        slug=payload.slug,
        pricing=payload.pricing.to_schedule() if payload.pricing else None,
    )
    return serialize_event(event)


@router.patch("/events/{event_id}/pricing", dependencies=[Depends(require_operator)])
async def update_pricing(
    event_id: UUID, payload: PricingPayload, request: Request
) -> dict[str, object]:
    """Edit the pricing schedule of an event."""
    container: AppContainer = request.app.state.container
    try:
        event = container.event_service.update_pricing(
            event_id, payload.to_schedule()
        )
    except EventNotFoundError as exc:
        raise _event_not_found() from exc
    return serialize_event(event)


@router.get("/events/{event_id}/photos", dependencies=[Depends(require_operator)])
async def list_photos(event_id: UUID, request: Request) -> dict[str, object]:
    """Return every photo record of an event."""
    container: AppContainer = request.app.state.container
    photos = container.ingestion_service.list_photos(event_id)
    return {"photos": [serialize_operator_photo(photo) for photo in photos]}


@router.post("/events/{event_id}/photos", dependencies=[Depends(require_operator)])
async def upload_photos(
    event_id: UUID,
    request: Request,
    files: list[UploadFile] = File(...),
    x_operator_id: str = Header(...),
) -> dict[str, object]:
    """Upload files concurrently; each file succeeds or fails on its own."""
    container: AppContainer = request.app.state.container
    try:
        container.event_service.get_event(event_id)
    except EventNotFoundError as exc:
        raise _event_not_found() from exc
    uploads = [
        UploadedFile(
            name=upload.filename or "upload",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in files
    ]
    entries = await container.ingestion_service.ingest(
        x_operator_id, event_id, uploads
    )
    return {"uploads": [serialize_queue_entry(entry) for entry in entries]}


@router.get("/uploads", dependencies=[Depends(require_operator)])
async def list_uploads(
    request: Request, event_id: UUID | None = None
) -> dict[str, object]:
    """Return ingestion queue entries."""
    container: AppContainer = request.app.state.container
    entries = container.ingestion_service.queue.list_entries(event_id)
    return {"uploads": [serialize_queue_entry(entry) for entry in entries]}


@router.delete(
    "/events/{event_id}/photos/{photo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_operator)],
)
async def delete_photo(
    event_id: UUID, photo_id: UUID, request: Request, confirm: bool = False
) -> None:
    """Delete a photo record; requires ``confirm=true``."""
    container: AppContainer = request.app.state.container
    try:
        container.ingestion_service.delete_photo(
            event_id, photo_id, confirmed=confirm
        )
    except DeletionNotConfirmedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Deletion must be confirmed",
        ) from exc
    except PhotoNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found"
        ) from exc


@router.websocket("/events/{event_id}/photos/live")
async def live_photos(websocket: WebSocket, event_id: UUID) -> None:
    """Push the event's photo listing on connect and after every change."""
    container: AppContainer = websocket.app.state.container
    token = websocket.headers.get("x-operator-token")
    if not token or token != container.settings.operator_token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()

    loop = asyncio.get_running_loop()
    updates: asyncio.Queue[list[PhotoRecord]] = asyncio.Queue()

    def _on_change(photos: list[PhotoRecord]) -> None:
        loop.call_soon_threadsafe(updates.put_nowait, photos)

    async def _forward() -> None:
        while True:
            photos = await updates.get()
            await websocket.send_json(
                {"photos": [serialize_operator_photo(photo) for photo in photos]}
            )

    subscription = container.listing_hub.subscribe(event_id, _on_change)
    forward_task = asyncio.create_task(_forward())
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        container.listing_hub.unsubscribe(subscription)
        forward_task.cancel()
        with contextlib.suppress(asyncio.CancelledError, WebSocketDisconnect):
            await forward_task
