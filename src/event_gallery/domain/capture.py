"""Domain models for selfie search notices."""

from dataclasses import dataclass
from enum import Enum


class NoticeKind(str, Enum):
    """Kinds of user-facing notices raised during a search."""

    RESOURCE_DENIED = "resource_denied"
    MODEL_UNAVAILABLE = "model_unavailable"
    MODEL_LOADING = "model_loading"
    NO_DETECTION = "no_detection"
    EXTRACTION_FAILURE = "extraction_failure"
    NO_MATCH_FALLBACK = "no_match_fallback"
    CANCEL_PENDING = "cancel_pending"
    INVALID_TRANSITION = "invalid_transition"


@dataclass(frozen=True)
class SearchNotice:
    """Represents the message shown after a search transition."""

    kind: NoticeKind
    text: str
