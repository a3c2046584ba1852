"""Tests for face matching."""

from uuid import uuid4

import numpy as np

from event_gallery.domain.capture import NoticeKind
from event_gallery.services.matching import FaceMatcher
from tests.conftest import make_photo


def test_match_returns_only_photos_within_threshold() -> None:
    event_id = uuid4()
    near = make_photo(event_id, (0.1, 0.1))
    far = make_photo(event_id, (0.9, 0.9))
    close = make_photo(event_id, (0.2, 0.0))
    matcher = FaceMatcher(threshold=0.6)

    result = matcher.filter_gallery((0.1, 0.1), [near, far, close])

    assert [photo.id for photo in result.photos] == [near.id, close.id]
    assert result.matched == 2
    assert result.total == 3
    assert result.fallback is False
    assert result.genuine_subset is True
    assert result.notice is None


def test_distance_equal_to_threshold_is_not_a_match() -> None:
    event_id = uuid4()
    boundary = make_photo(event_id, (3.0, 4.0))
    inside = make_photo(event_id, (3.0, 3.9))
    matcher = FaceMatcher(threshold=5.0)

    matches = matcher.match(
        (0.0, 0.0),
        [(boundary.id, boundary.descriptor), (inside.id, inside.descriptor)],
    )

    assert matches == {inside.id}


def test_no_match_falls_back_to_full_gallery() -> None:
    event_id = uuid4()
    photos = [make_photo(event_id, (5.0, 5.0)), make_photo(event_id, (6.0, 6.0))]
    matcher = FaceMatcher(threshold=0.6)

    result = matcher.filter_gallery((0.0, 0.0), photos)

    assert result.photos == photos
    assert result.fallback is True
    assert result.matched == 0
    assert result.genuine_subset is False
    assert result.notice is not None
    assert result.notice.kind is NoticeKind.NO_MATCH_FALLBACK
    assert result.notice.text == "No matches found. Showing all photos."


def test_unresolved_photos_are_included_by_default() -> None:
    event_id = uuid4()
    pending = make_photo(event_id, None)
    far = make_photo(event_id, (9.0, 9.0))
    matcher = FaceMatcher()

    result = matcher.filter_gallery((0.0, 0.0), [pending, far])

    assert [photo.id for photo in result.photos] == [pending.id]
    assert result.fallback is False


def test_unresolved_photos_can_be_excluded() -> None:
    event_id = uuid4()
    pending = make_photo(event_id, None)
    near = make_photo(event_id, (0.0, 0.1))
    matcher = FaceMatcher(include_unresolved=False)

    result = matcher.filter_gallery((0.0, 0.0), [pending, near])

    assert [photo.id for photo in result.photos] == [near.id]


def test_descriptor_of_other_length_counts_as_unresolved() -> None:
    event_id = uuid4()
    odd = make_photo(event_id, (0.0, 0.0, 0.0))

    assert FaceMatcher().match((0.0, 0.0), [(odd.id, odd.descriptor)]) == {odd.id}
    assert (
        FaceMatcher(include_unresolved=False).match(
            (0.0, 0.0), [(odd.id, odd.descriptor)]
        )
        == set()
    )


def test_all_unresolved_without_inclusion_falls_back() -> None:
    event_id = uuid4()
    photos = [make_photo(event_id, None), make_photo(event_id, ())]
    matcher = FaceMatcher(include_unresolved=False)

    result = matcher.filter_gallery((0.0, 0.0), photos)

    assert result.fallback is True
    assert result.photos == photos


def test_match_is_deterministic() -> None:
    event_id = uuid4()
    photos = [make_photo(event_id, (index / 10, 0.0)) for index in range(10)]
    candidates = [(photo.id, photo.descriptor) for photo in photos]
    matcher = FaceMatcher(threshold=0.35)

    first = matcher.match((0.0, 0.0), candidates)
    second = matcher.match((0.0, 0.0), candidates)

    assert first == second
    assert first == {photo.id for photo in photos[:4]}


def test_empty_gallery_falls_back_to_empty_list() -> None:
    result = FaceMatcher().filter_gallery((0.0, 0.0), [])

    assert result.photos == []
    assert result.fallback is True
    assert result.total == 0


def test_three_photo_event_scenarios() -> None:
    event_id = uuid4()
    photo1 = make_photo(event_id, (0.0, 0.0))
    photo2 = make_photo(event_id, (10.0, 10.0))
    photo3 = make_photo(event_id, (0.1, 0.1))
    photos = [photo1, photo2, photo3]
    matcher = FaceMatcher(threshold=0.6)

    near = matcher.filter_gallery((0.0, 0.0), photos)
    far = matcher.filter_gallery((50.0, -50.0), photos)

    assert [photo.id for photo in near.photos] == [photo1.id, photo3.id]
    assert near.fallback is False
    assert far.photos == photos
    assert far.fallback is True


def test_all_absent_descriptors_match_everything() -> None:
    event_id = uuid4()
    photos = [make_photo(event_id, None) for _ in range(3)]

    matches = FaceMatcher().match((0.0, 0.0), [(p.id, p.descriptor) for p in photos])

    assert matches == {photo.id for photo in photos}


def test_array_descriptors_are_matched_and_empty_arrays_are_unresolved() -> None:
    near, far, empty = uuid4(), uuid4(), uuid4()
    candidates = [
        (near, np.array([0.0, 0.1])),
        (far, np.array([3.0, 3.0])),
        (empty, np.array([])),
    ]

    assert FaceMatcher().match((0.0, 0.0), candidates) == {near, empty}
    assert FaceMatcher(include_unresolved=False).match((0.0, 0.0), candidates) == {
        near
    }
