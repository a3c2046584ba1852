"""Euclidean face matching over one event's photo set."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID

import numpy as np

from event_gallery.domain.capture import NoticeKind, SearchNotice
from event_gallery.domain.photos import Descriptor, PhotoRecord

NO_MATCH_NOTICE = SearchNotice(
    kind=NoticeKind.NO_MATCH_FALLBACK,
    text="No matches found. Showing all photos.",
)


@dataclass(frozen=True)
class GalleryFilter:
    """Photos to show after a face search."""

    photos: list[PhotoRecord]
    total: int
    matched: int
    fallback: bool

    @property
    def genuine_subset(self) -> bool:
        """True when the search narrowed the gallery without emptying it."""
        return not self.fallback and 0 < self.matched < self.total

    @property
    def notice(self) -> SearchNotice | None:
        """Notice to surface alongside the filtered photos."""
        return NO_MATCH_NOTICE if self.fallback else None


@dataclass(frozen=True)
class FaceMatcher:
    """Partitions candidates by distance to a query descriptor.

    Candidates without a usable descriptor (missing, empty, or of another
    length than the query) follow ``include_unresolved``.
    """

    threshold: float = 0.6
    include_unresolved: bool = True

    def match(
        self,
        query: Sequence[float],
        candidates: Iterable[tuple[UUID, Sequence[float] | None]],
    ) -> set[UUID]:
        """Return the ids of candidates strictly closer than the threshold."""
        query_vector = np.asarray(query, dtype=np.float64)
        resolved_ids: list[UUID] = []
        resolved_vectors: list[Sequence[float]] = []
        matches: set[UUID] = set()
        for photo_id, descriptor in candidates:
            if (
                descriptor is None
                or len(descriptor) == 0
                or len(descriptor) != query_vector.shape[0]
            ):
                if self.include_unresolved:
                    matches.add(photo_id)
                continue
            resolved_ids.append(photo_id)
            resolved_vectors.append(descriptor)

        if resolved_vectors:
            matrix = np.asarray(resolved_vectors, dtype=np.float64)
            distances = np.linalg.norm(matrix - query_vector, axis=1)
            for photo_id, distance in zip(resolved_ids, distances, strict=True):
                if distance < self.threshold:
                    matches.add(photo_id)
        return matches

    def filter_gallery(
        self, query: Descriptor, photos: Sequence[PhotoRecord]
    ) -> GalleryFilter:
        """Filter photos in gallery order, falling back to all on no match."""
        matches = self.match(query, ((photo.id, photo.descriptor) for photo in photos))
        if not matches:
            return GalleryFilter(
                photos=list(photos), total=len(photos), matched=0, fallback=True
            )
        return GalleryFilter(
            photos=[photo for photo in photos if photo.id in matches],
            total=len(photos),
            matched=len(matches),
            fallback=False,
        )
