"""Supabase Storage adapter for uploaded photos."""

import asyncio
from dataclasses import dataclass

from supabase import Client

from event_gallery.services.ingestion import ObjectStorage


@dataclass
class SupabaseObjectStorage(ObjectStorage):
    """Stores uploads in a Supabase Storage bucket."""

    client: Client
    bucket: str

    async def upload(
        self, path: str, content: bytes, content_type: str | None
    ) -> str:
        """Upload without overwrite and return the public URL."""
        return await asyncio.to_thread(self._upload, path, content, content_type)

    def _upload(self, path: str, content: bytes, content_type: str | None) -> str:
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path,
            content,
            {
                "content-type": content_type or "application/octet-stream",
                "upsert": "false",
            },
        )
        url = bucket.get_public_url(path)
        if not url:
            raise RuntimeError(f"No public URL returned for {path}")
        return url.rstrip("?")
