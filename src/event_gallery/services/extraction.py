"""Face descriptor extraction behind a swappable client."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from pydantic import BaseModel

from event_gallery.domain.errors import FaceExtractionError
from event_gallery.domain.photos import Descriptor

_logger = logging.getLogger(__name__)


class FaceExtractorClient(Protocol):
    """Interface for a face detection and embedding backend."""

    async def load(self) -> None:
        """Prepare the backend models; raise if they cannot be loaded."""

    async def extract(self, frame: object) -> dict[str, object]:
        """Return the raw extraction payload for a camera frame."""


class ExtractorStatus(str, Enum):
    """Readiness of the extractor models."""

    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class ExtractionPayload(BaseModel):
    """Validated extractor response; a null descriptor means no face."""

    descriptor: list[float] | None = None


@dataclass
class FaceExtractionService:
    """Gates extraction on model readiness and validates descriptors."""

    client: FaceExtractorClient
    descriptor_length: int
    status: ExtractorStatus = field(default=ExtractorStatus.LOADING)

    @property
    def ready(self) -> bool:
        return self.status is ExtractorStatus.READY

    @property
    def unavailable(self) -> bool:
        return self.status is ExtractorStatus.UNAVAILABLE

    async def load(self) -> None:
        """Load extractor models once; failures disable face search."""
        if self.ready:
            return
        try:
            await self.client.load()
        except Exception:
            _logger.warning(
                "Face extractor models could not be loaded. Face search disabled.",
                exc_info=True,
            )
            self.status = ExtractorStatus.UNAVAILABLE
            return
        self.status = ExtractorStatus.READY
        _logger.info("Face extractor ready")

    async def extract(self, frame: object) -> Descriptor | None:
        """Return the descriptor of the single detected face, or None."""
        raw = await self.client.extract(frame)
        payload = ExtractionPayload.model_validate(raw)
        if payload.descriptor is None:
            return None
        if len(payload.descriptor) != self.descriptor_length:
            raise FaceExtractionError(
                f"Expected descriptor of length {self.descriptor_length}, "
                f"got {len(payload.descriptor)}"
            )
        return tuple(payload.descriptor)
