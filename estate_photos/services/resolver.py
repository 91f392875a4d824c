"""Map an external ``(property_id, filename)`` pair to a stored Photo.

Every rejection returns None, whether the input was malformed, hostile or
simply unknown, so callers cannot tell those cases apart.
"""
from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from estate_photos.models.photo import Photo
from estate_photos.models.property import Property

logger = logging.getLogger(__name__)

# upper bound of a signed 64-bit primary key
MAX_ID = 2**63 - 1


def parse_property_id(raw: str) -> Optional[int]:
    """Accept only plain ASCII decimal digits naming a positive id."""
    if not raw or not raw.isascii() or not raw.isdigit():
        return None
    value = int(raw)
    if value < 1 or value > MAX_ID:
        return None
    return value


def is_acceptable_filename(raw: str) -> bool:
    if not raw or "\x00" in raw:
        return False
    # stored names are flat; anything that could step out of the
    # property's directory never matches a stored name anyway
    if "/" in raw or raw in (".", ".."):
        return False
    return True


def resolve_photo(db: Session, property_id: str, raw_filename: str) -> Optional[Photo]:
    pid = parse_property_id(property_id)
    if pid is None:
        logger.debug("rejected property id %r", property_id)
        return None

    # plain get: the property's photo collection stays unloaded
    if db.get(Property, pid) is None:
        logger.debug("no property %s", pid)
        return None

    if not is_acceptable_filename(raw_filename):
        logger.debug("rejected filename %r for property %s", raw_filename, pid)
        return None

    photo = db.execute(
        select(Photo).where(Photo.property_id == pid, Photo.filename == raw_filename)
    ).scalar_one_or_none()
    if photo is None:
        logger.debug("no photo %r on property %s", raw_filename, pid)
    return photo
