"""Domain exceptions raised by gallery services."""


class EventNotFoundError(LookupError):
    """Raised when an event id or slug does not resolve."""


class GalleryViewNotFoundError(LookupError):
    """Raised when a gallery view id is unknown or already closed."""


class PhotoNotFoundError(LookupError):
    """Raised when a photo id is unknown or belongs to another event."""


class CameraUnavailableError(RuntimeError):
    """Raised when the camera device is denied, busy or missing."""


class FaceExtractionError(RuntimeError):
    """Raised when the extractor returns an unusable result."""


class DeletionNotConfirmedError(RuntimeError):
    """Raised when a photo deletion arrives without explicit confirmation."""
