"""Operator upload pipeline."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from event_gallery.domain.errors import DeletionNotConfirmedError, PhotoNotFoundError
from event_gallery.domain.ingestion import QueueEntry, UploadedFile, UploadStatus
from event_gallery.domain.photos import PhotoRecord, PhotoStatus
from event_gallery.services.listing import PhotoListingHub, PhotoRepository

_logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Write-once object storage."""

    async def upload(
        self, path: str, content: bytes, content_type: str | None
    ) -> str:
        """Store bytes at a path and return a durable retrieval URL."""


@dataclass
class IngestionQueue:
    """Per-file upload progress keyed by a generated entry id.

    Finished entries are kept for ``retention`` after their last update so
    operators can read the outcome, then pruned.
    """

    entries: dict[UUID, QueueEntry] = field(default_factory=dict)
    retention: timedelta = timedelta(hours=1)

    def enqueue(self, event_id: UUID, file_name: str) -> QueueEntry:
        entry = QueueEntry(
            id=uuid4(),
            event_id=event_id,
            file_name=file_name,
            status=UploadStatus.UPLOADING,
            updated_at=datetime.now(tz=UTC),
        )
        self.entries[entry.id] = entry
        return entry

    def update(self, entry_id: UUID, **changes: object) -> QueueEntry:
        entry = replace(
            self.entries[entry_id], updated_at=datetime.now(tz=UTC), **changes
        )
        self.entries[entry_id] = entry
        return entry

    def get(self, entry_id: UUID) -> QueueEntry | None:
        return self.entries.get(entry_id)

    def list_entries(self, event_id: UUID | None = None) -> list[QueueEntry]:
        """Return entries, newest last, optionally for one event."""
        return [
            entry
            for entry in self.entries.values()
            if event_id is None or entry.event_id == event_id
        ]

    def prune(self, now: datetime | None = None) -> int:
        """Drop finished entries older than the retention window."""
        cutoff = (now or datetime.now(tz=UTC)) - self.retention
        expired = [
            entry_id
            for entry_id, entry in self.entries.items()
            if entry.status is not UploadStatus.UPLOADING and entry.updated_at < cutoff
        ]
        for entry_id in expired:
            del self.entries[entry_id]
        return len(expired)


@dataclass
class IngestionService:
    """Uploads operator files and records photos for them."""

    storage: ObjectStorage
    photo_repository: PhotoRepository
    listing_hub: PhotoListingHub
    queue: IngestionQueue = field(default_factory=IngestionQueue)

    async def ingest(
        self, operator_id: str, event_id: UUID, files: Sequence[UploadedFile]
    ) -> list[QueueEntry]:
        """Upload every file concurrently and return their final entries."""
        self.queue.prune()
        entries = [self.queue.enqueue(event_id, upload.name) for upload in files]
        await asyncio.gather(
            *(
                self._ingest_one(entry.id, operator_id, event_id, upload)
                for entry, upload in zip(entries, files, strict=True)
            )
        )
        return [self.queue.entries[entry.id] for entry in entries]

    def list_photos(self, event_id: UUID) -> list[PhotoRecord]:
        return self.photo_repository.list_photos(event_id)

    def delete_photo(self, event_id: UUID, photo_id: UUID, *, confirmed: bool) -> None:
        """Remove a photo record of the event; the stored object is left in place."""
        if not confirmed:
            raise DeletionNotConfirmedError("Photo deletion must be confirmed")
        photo = self.photo_repository.get_photo(photo_id)
        if photo is None or photo.event_id != event_id:
            raise PhotoNotFoundError(str(photo_id))
        self.photo_repository.delete_photo(photo_id)
        _logger.info("Deleted photo %s from event %s", photo_id, photo.event_id)
        self.listing_hub.publish(photo.event_id)

    async def _ingest_one(
        self,
        entry_id: UUID,
        operator_id: str,
        event_id: UUID,
        upload: UploadedFile,
    ) -> None:
        try:
            path = build_storage_path(
                operator_id, event_id, entry_id, upload.name, datetime.now(tz=UTC)
            )
            self.queue.update(entry_id, storage_path=path)
            url = await self.storage.upload(path, upload.content, upload.content_type)
            photo = self.photo_repository.create_photo(
                event_id=event_id,
                agency_id=operator_id,
                original_url=url,
                display_url=url,
                status=PhotoStatus.ACTIVE,
                created_at=datetime.now(tz=UTC),
            )
        except Exception as exc:
            _logger.exception(
                "Upload failed", extra={"entry_id": entry_id, "file_name": upload.name}
            )
            self.queue.update(entry_id, status=UploadStatus.ERROR, error=str(exc))
            return
        self.queue.update(entry_id, status=UploadStatus.SUCCESS, photo_id=photo.id)
        self.listing_hub.publish(event_id)


def build_storage_path(
    operator_id: str,
    event_id: UUID,
    entry_id: UUID,
    file_name: str,
    uploaded_at: datetime,
) -> str:
    """Namespace an upload by operator and event with a unique file prefix."""
    millis = int(uploaded_at.timestamp() * 1000)
    safe_name = file_name.replace("\\", "/").rsplit("/", 1)[-1] or "upload"
    return (
        f"agency_uploads/{operator_id}/{event_id}/"
        f"{millis}_{entry_id.hex[:8]}_{safe_name}"
    )
