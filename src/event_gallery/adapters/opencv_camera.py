"""OpenCV camera device with exclusive acquisition."""

import asyncio
import logging
from dataclasses import dataclass, field

import cv2
import numpy as np

from event_gallery.domain.errors import CameraUnavailableError
from event_gallery.services.capture import CameraDevice, MediaStream

_logger = logging.getLogger(__name__)


def _parse_source(source: str) -> int | str:
    """Numeric sources are local webcam indexes, anything else a stream URL."""
    cleaned = source.strip()
    return int(cleaned) if cleaned.isdigit() else cleaned


@dataclass
class OpenCvStream(MediaStream):
    """An open VideoCapture handle."""

    capture: cv2.VideoCapture
    owner: "OpenCvCamera"
    stopped: bool = False

    async def read_frame(self) -> np.ndarray:
        if self.stopped:
            raise RuntimeError("Camera stream already stopped")
        ok, frame = await asyncio.to_thread(self.capture.read)
        if not ok or frame is None:
            raise RuntimeError("Failed to read camera frame")
        return frame

    def stop(self) -> None:
        if self.stopped:
            return
        self.stopped = True
        self.capture.release()
        self.owner.active = None


@dataclass
class OpenCvCamera(CameraDevice):
    """Camera that hands out at most one open stream at a time."""

    source: str
    active: OpenCvStream | None = field(default=None, repr=False)
    opening: bool = field(default=False, repr=False)

    async def acquire(self) -> OpenCvStream:
        """Open the configured source; raise when busy or unavailable."""
        if self.active is not None or self.opening:
            raise CameraUnavailableError("Camera is already in use")
        self.opening = True
        try:
            capture = await asyncio.to_thread(
                cv2.VideoCapture, _parse_source(self.source)
            )
        finally:
            self.opening = False
        if not capture.isOpened():
            capture.release()
            raise CameraUnavailableError(f"Cannot open camera source {self.source!r}")
        _logger.info("Camera opened")
        self.active = OpenCvStream(capture=capture, owner=self)
        return self.active
