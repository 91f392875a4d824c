"""Cover photo selection.

The cover is a fixed editorial slot: once a property has at least
``COVER_MIN_PHOTOS`` photos, the photo at ``COVER_POSITION`` represents it.
Smaller galleries, and galleries with a gap at that position, fall back to
the lowest-positioned photo.

Everything here is a pure function of the property's current photo set and
is recomputed on each call.
"""
from __future__ import annotations
from typing import Iterable, List

COVER_POSITION = 3
COVER_MIN_PHOTOS = 3
DEFAULT_POSITION = 1


def by_position(photos: Iterable) -> List:
    return sorted(photos, key=lambda p: p.position)


def covers(photos: Iterable) -> List:
    """Photos sitting in the cover slot (at most one under the unique index)."""
    return [p for p in photos if p.position == COVER_POSITION]


def has_cover_photo(prop) -> bool:
    return len(prop.photos) >= COVER_MIN_PHOTOS


def cover_photo_position(prop) -> int:
    return COVER_POSITION if has_cover_photo(prop) else DEFAULT_POSITION


def cover_photo(prop):
    """Return the photo that represents ``prop``, or None for an empty gallery."""
    ordered = by_position(prop.photos)
    if not ordered:
        return None
    if len(ordered) >= COVER_MIN_PHOTOS:
        slot = covers(ordered)
        if slot:
            return slot[0]
    return ordered[0]


def is_cover_photo(prop, photo) -> bool:
    chosen = cover_photo(prop)
    if chosen is None:
        return False
    return chosen is photo or (chosen.id is not None and chosen.id == photo.id)
