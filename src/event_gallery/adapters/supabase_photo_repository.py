"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from event_gallery.domain.photos import PhotoRecord, PhotoStatus
from event_gallery.services.listing import PhotoRepository

_COLUMNS = (
    "id, event_id, agency_id, original_url, display_url, descriptor, status, "
    "created_at"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo records.

    The ``descriptor`` column is written by the external embedding pipeline;
    this repository only ever inserts it empty.
    """

    client: Client

    def create_photo(  # noqa: PLR0913
        self,
        event_id: UUID,
        agency_id: str,
        original_url: str,
        display_url: str,
        status: PhotoStatus,
        created_at: datetime,
    ) -> PhotoRecord:
        """Create a photo row and return it."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "event_id": str(event_id),
                    "agency_id": agency_id,
                    "original_url": original_url,
                    "display_url": display_url,
                    "descriptor": [],
                    "status": status.value,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo")
        return _to_record(response.data[0])

    def get_photo(self, photo_id: UUID) -> PhotoRecord | None:
        """Return a photo by id, if present."""
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def list_photos(
        self, event_id: UUID, status: PhotoStatus | None = None
    ) -> list[PhotoRecord]:
        """Return photos of an event in upload order."""
        query = self.client.table("photos").select(_COLUMNS).eq(
            "event_id", str(event_id)
        )
        if status is not None:
            query = query.eq("status", status.value)
        response = query.order("created_at").execute()
        return [_to_record(row) for row in response.data or []]

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row."""
        self.client.table("photos").delete().eq("id", str(photo_id)).execute()


def _to_record(row: dict[str, object]) -> PhotoRecord:
    descriptor = row.get("descriptor")
    created_at = row.get("created_at")
    original_url = str(row["original_url"])
    return PhotoRecord(
        id=UUID(str(row["id"])),
        event_id=UUID(str(row["event_id"])),
        agency_id=str(row.get("agency_id") or ""),
        original_url=original_url,
        display_url=str(row.get("display_url") or original_url),
        descriptor=tuple(float(value) for value in descriptor)
        if isinstance(descriptor, list) and descriptor
        else None,
        status=PhotoStatus(row.get("status") or PhotoStatus.ACTIVE.value),
        created_at=datetime.fromisoformat(created_at)
        if isinstance(created_at, str)
        else None,
    )
