"""Capture session state machine for selfie search.

The session state is a single tagged value. The open camera stream only
exists inside ``CameraActive`` and ``Processing``, so a session can never hold
more than one acquisition, and every transition back to ``Idle`` releases the
stream it carried exactly once.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from event_gallery.domain.capture import NoticeKind, SearchNotice
from event_gallery.domain.errors import CameraUnavailableError
from event_gallery.services.extraction import FaceExtractionService
from event_gallery.services.matching import FaceMatcher, GalleryFilter
from event_gallery.services.views import GalleryView

_logger = logging.getLogger(__name__)


class MediaStream(Protocol):
    """An acquired camera stream."""

    async def read_frame(self) -> object:
        """Return the current frame."""

    def stop(self) -> None:
        """Stop every track of the stream and give the device back."""


class CameraDevice(Protocol):
    """Exclusive access to a camera."""

    async def acquire(self) -> MediaStream:
        """Open the camera; raise CameraUnavailableError when denied or busy."""


class CaptureStatus(str, Enum):
    """Coarse state of a capture session."""

    IDLE = "idle"
    CAMERA_ACTIVE = "camera_active"
    PROCESSING = "processing"


@dataclass(frozen=True)
class Idle:
    filtered: bool = False
    status: CaptureStatus = CaptureStatus.IDLE


@dataclass(frozen=True)
class CameraActive:
    stream: MediaStream
    status: CaptureStatus = CaptureStatus.CAMERA_ACTIVE


@dataclass(frozen=True)
class Processing:
    stream: MediaStream
    status: CaptureStatus = CaptureStatus.PROCESSING


CaptureState = Idle | CameraActive | Processing


@dataclass(frozen=True)
class CaptureOutcome:
    """Result of a transition request."""

    status: CaptureStatus
    filtered: bool
    notice: SearchNotice | None = None
    result: GalleryFilter | None = None


_CAMERA_DENIED = SearchNotice(NoticeKind.RESOURCE_DENIED, "Camera access denied.")
_MODEL_UNAVAILABLE = SearchNotice(
    NoticeKind.MODEL_UNAVAILABLE, "Face search is unavailable right now."
)
_MODEL_LOADING = SearchNotice(
    NoticeKind.MODEL_LOADING, "AI models loading... please wait."
)
_NO_FACE = SearchNotice(NoticeKind.NO_DETECTION, "No face detected. Try again.")
_ANALYSIS_FAILED = SearchNotice(NoticeKind.EXTRACTION_FAILURE, "Analysis failed.")
_CANCEL_PENDING = SearchNotice(
    NoticeKind.CANCEL_PENDING, "Search will stop once the current scan finishes."
)


@dataclass
class CaptureSession:
    """Single search attempt lifecycle bound to one gallery view."""

    camera: CameraDevice
    extraction_service: FaceExtractionService
    matcher: FaceMatcher
    view: GalleryView
    state: CaptureState = field(default_factory=Idle)
    acquire_count: int = 0
    release_count: int = 0
    _cancel_requested: bool = field(default=False, init=False, repr=False)
    _acquiring: bool = field(default=False, init=False, repr=False)

    @property
    def camera_acquired(self) -> bool:
        return not isinstance(self.state, Idle)

    async def start(self) -> CaptureOutcome:
        """Idle -> CameraActive: request the camera."""
        if self._acquiring or not isinstance(self.state, Idle):
            return self._outcome(_invalid("A search is already in progress."))
        if self.extraction_service.unavailable:
            return self._outcome(_MODEL_UNAVAILABLE)
        self._acquiring = True
        self._cancel_requested = False
        try:
            stream = await self.camera.acquire()
        except CameraUnavailableError:
            _logger.warning("Camera acquisition failed", exc_info=True)
            self.state = Idle(filtered=self.view.filtered)
            return self._outcome(_CAMERA_DENIED)
        finally:
            self._acquiring = False
        self.acquire_count += 1
        if self._cancel_requested:
            self._release(stream)
            return self._finish_cancel()
        self.state = CameraActive(stream)
        return self._outcome()

    async def capture(self) -> CaptureOutcome:
        """CameraActive -> Processing -> CameraActive | Idle."""
        state = self.state
        if not isinstance(state, CameraActive):
            return self._outcome(_invalid("Start the camera before capturing."))
        if self.extraction_service.unavailable:
            return self._outcome(_MODEL_UNAVAILABLE)
        if not self.extraction_service.ready:
            return self._outcome(_MODEL_LOADING)

        stream = state.stream
        self.state = Processing(stream)
        try:
            frame = await stream.read_frame()
            descriptor = await self.extraction_service.extract(frame)
        except Exception:
            _logger.exception("Face analysis failed", extra={"view_id": self.view.id})
            self._release(stream)
            if self._cancel_requested:
                return self._finish_cancel()
            self.state = Idle(filtered=self.view.filtered)
            return self._outcome(_ANALYSIS_FAILED)

        if self._cancel_requested:
            self._release(stream)
            return self._finish_cancel()

        if descriptor is None:
            self.state = CameraActive(stream)
            return self._outcome(_NO_FACE)

        self._release(stream)
        result = self.matcher.filter_gallery(descriptor, self.view.photos)
        self.view.show(result)
        self.state = Idle(filtered=self.view.filtered)
        _logger.info(
            "Face search matched %s of %s photos (fallback=%s)",
            result.matched,
            result.total,
            result.fallback,
        )
        return self._outcome(result.notice, result)

    def cancel(self) -> CaptureOutcome:
        """Abort the search and show the whole gallery again."""
        state = self.state
        if isinstance(state, Processing) or self._acquiring:
            self._cancel_requested = True
            return self._outcome(_CANCEL_PENDING)
        if isinstance(state, CameraActive):
            self._release(state.stream)
        return self._finish_cancel()

    def _finish_cancel(self) -> CaptureOutcome:
        self._cancel_requested = False
        self.view.reset()
        self.state = Idle(filtered=False)
        return self._outcome()

    def _release(self, stream: MediaStream) -> None:
        try:
            stream.stop()
        finally:
            self.release_count += 1

    def _outcome(
        self, notice: SearchNotice | None = None, result: GalleryFilter | None = None
    ) -> CaptureOutcome:
        filtered = self.state.filtered if isinstance(self.state, Idle) else False
        return CaptureOutcome(
            status=self.state.status,
            filtered=filtered,
            notice=notice,
            result=result,
        )


def _invalid(text: str) -> SearchNotice:
    return SearchNotice(NoticeKind.INVALID_TRANSITION, text)
