"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from event_gallery.adapters.face_extractor_client import HttpxFaceExtractorClient
from event_gallery.adapters.opencv_camera import OpenCvCamera
from event_gallery.adapters.supabase_event_repository import SupabaseEventRepository
from event_gallery.adapters.supabase_photo_repository import SupabasePhotoRepository
from event_gallery.adapters.supabase_storage import SupabaseObjectStorage
from event_gallery.config import Settings, default_pricing
from event_gallery.services.cart import Cart
from event_gallery.services.events import EventService
from event_gallery.services.extraction import FaceExtractionService
from event_gallery.services.gallery import GalleryService
from event_gallery.services.ingestion import IngestionQueue, IngestionService
from event_gallery.services.listing import PhotoListingHub
from event_gallery.services.matching import FaceMatcher


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    event_service: EventService
    gallery_service: GalleryService
    extraction_service: FaceExtractionService
    ingestion_service: IngestionService
    listing_hub: PhotoListingHub
    cart: Cart
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    pricing = default_pricing(resolved_settings)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    event_repository = SupabaseEventRepository(supabase_client, pricing)
    photo_repository = SupabasePhotoRepository(supabase_client)
    storage = SupabaseObjectStorage(supabase_client, resolved_settings.storage_bucket)
    extractor_client = HttpxFaceExtractorClient.create(
        resolved_settings.extractor_base_url,
        load_attempts=resolved_settings.extractor_load_attempts,
        load_interval=resolved_settings.extractor_load_interval_seconds,
    )
    extraction_service = FaceExtractionService(
        client=extractor_client,
        descriptor_length=resolved_settings.descriptor_length,
    )
    matcher = FaceMatcher(
        threshold=resolved_settings.match_threshold,
        include_unresolved=resolved_settings.include_unresolved_photos,
    )
    gallery_service = GalleryService(
        event_repository=event_repository,
        photo_repository=photo_repository,
        camera=OpenCvCamera(resolved_settings.camera_source),
        extraction_service=extraction_service,
        matcher=matcher,
        view_ttl=timedelta(seconds=resolved_settings.view_idle_seconds),
    )
    listing_hub = PhotoListingHub(photo_repository)
    ingestion_service = IngestionService(
        storage=storage,
        photo_repository=photo_repository,
        listing_hub=listing_hub,
        queue=IngestionQueue(
            retention=timedelta(seconds=resolved_settings.upload_retention_seconds)
        ),
    )

    async def close_resources() -> None:
        gallery_service.close_all()
        await extractor_client.close()

    return AppContainer(
        settings=resolved_settings,
        event_service=EventService(event_repository, pricing),
        gallery_service=gallery_service,
        extraction_service=extraction_service,
        ingestion_service=ingestion_service,
        listing_hub=listing_hub,
        cart=Cart(),
        close_resources=close_resources,
    )
