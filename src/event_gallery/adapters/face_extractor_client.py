"""HTTP client for a remote face embedding service."""

import asyncio
import logging
from dataclasses import dataclass

import cv2
import httpx
import numpy as np

from event_gallery.services.extraction import FaceExtractorClient

_logger = logging.getLogger(__name__)


@dataclass
class HttpxFaceExtractorClient(FaceExtractorClient):
    """Face extractor backed by a remote HTTP inference service.

    ``load`` polls the health endpoint while the service is starting up or
    unreachable. An error status from the service fails immediately.
    """

    base_url: str
    http_client: httpx.AsyncClient
    load_attempts: int = 30
    load_interval: float = 2.0

    @classmethod
    def create(
        cls, base_url: str, load_attempts: int = 30, load_interval: float = 2.0
    ) -> "HttpxFaceExtractorClient":
        """Create an extractor client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            load_attempts=load_attempts,
            load_interval=load_interval,
        )

    async def load(self) -> None:
        """Wait for the service to report its models as loaded."""
        for attempt in range(1, self.load_attempts + 1):
            try:
                response = await self.http_client.get(f"{self.base_url}/health")
            except httpx.TransportError as exc:
                _logger.info(
                    "Face extractor unreachable (attempt %s/%s): %s",
                    attempt,
                    self.load_attempts,
                    exc,
                )
            else:
                response.raise_for_status()
                if response.json().get("ready"):
                    return
                _logger.info(
                    "Face extractor models still loading (attempt %s/%s)",
                    attempt,
                    self.load_attempts,
                )
            if attempt < self.load_attempts:
                await asyncio.sleep(self.load_interval)
        raise RuntimeError("Face extractor models are not loaded")

    async def extract(self, frame: object) -> dict[str, object]:
        """Send one frame as JPEG and return the descriptor payload."""
        response = await self.http_client.post(
            f"{self.base_url}/descriptors",
            files={"image": ("frame.jpg", encode_frame(frame), "image/jpeg")},
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def encode_frame(frame: object) -> bytes:
    """JPEG-encode a BGR frame; already-encoded bytes pass through."""
    if isinstance(frame, bytes | bytearray):
        return bytes(frame)
    if not isinstance(frame, np.ndarray):
        raise TypeError(f"Unsupported frame type: {type(frame).__name__}")
    ok, buffer = cv2.imencode(".jpg", frame)
    if not ok:
        raise RuntimeError("Failed to encode camera frame")
    return buffer.tobytes()
