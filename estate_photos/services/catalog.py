"""Write and listing operations over properties and their photos.

Invariants enforced here before the database sees a row:
    - property names are 2..100 characters after trimming
    - photo positions are > 0 and unique within a property
    - photo filenames are unique within a property
    - content type and file size are within the accepted set/range

The unique indexes on ``photos`` remain the final arbiter. A writer that
loses a race for an auto-assigned position recomputes it once; any other
collision surfaces as ``ConflictError``.
"""
from __future__ import annotations
import logging
from typing import List, Optional

import pydantic
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from estate_photos.core.exceptions import ConflictError, ValidationError
from estate_photos.models.photo import Photo
from estate_photos.models.property import Property
from estate_photos.schemas.property import PhotoCreate, PropertyCreate
from estate_photos.services.positions import next_position
from estate_photos.services.resolver import MAX_ID

logger = logging.getLogger(__name__)

TAKEN = "has already been taken"


def _errors_from(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "base"
        errors.setdefault(field, []).append(err["msg"])
    return errors


def _validate(schema, **fields):
    try:
        return schema(**fields)
    except pydantic.ValidationError as exc:
        raise ValidationError(_errors_from(exc)) from exc


def list_properties(db: Session) -> List[Property]:
    return (
        db.execute(
            select(Property)
            .options(selectinload(Property.photos))
            .order_by(Property.name.asc(), Property.id.asc())
        )
        .scalars()
        .all()
    )


def get_property(db: Session, property_id: int) -> Optional[Property]:
    # ids outside the key range cannot exist and would overflow the driver
    if not 1 <= property_id <= MAX_ID:
        return None
    return db.get(Property, property_id, options=(selectinload(Property.photos),))


def create_property(db: Session, name) -> Property:
    payload = _validate(PropertyCreate, name=name)
    prop = Property(name=payload.name)
    db.add(prop)
    db.commit()
    db.refresh(prop)
    logger.info("created property id=%s name=%r", prop.id, prop.name)
    return prop


def _position_taken(db: Session, property_id: int, position: int) -> bool:
    return db.execute(
        select(exists().where(Photo.property_id == property_id, Photo.position == position))
    ).scalar()


def _filename_taken(db: Session, property_id: int, filename: str) -> bool:
    return db.execute(
        select(exists().where(Photo.property_id == property_id, Photo.filename == filename))
    ).scalar()


def _insert(db: Session, photo: Photo) -> Photo:
    db.add(photo)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(photo)
    return photo


def create_photo(
    db: Session,
    property_id: int,
    filename,
    content_type,
    file_size,
    position=None,
) -> Photo:
    """Create a photo on an existing property.

    When ``position`` is None the next free slot (max + 1) is assigned;
    an explicit position is validated and kept as given.
    """
    payload = _validate(
        PhotoCreate,
        filename=filename,
        content_type=content_type,
        file_size=file_size,
        position=position,
    )

    if get_property(db, property_id) is None:
        raise ValidationError({"property": ["must exist"]})

    errors: dict[str, list[str]] = {}
    if payload.position is not None and _position_taken(db, property_id, payload.position):
        errors["position"] = [TAKEN]
    if _filename_taken(db, property_id, payload.filename):
        errors["filename"] = [TAKEN]
    if errors:
        raise ValidationError(errors)

    assigned = payload.position is None
    attempts = 2 if assigned else 1
    for attempt in range(1, attempts + 1):
        photo = Photo(
            property_id=property_id,
            filename=payload.filename,
            content_type=payload.content_type,
            file_size=payload.file_size,
            position=next_position(db, property_id) if assigned else payload.position,
        )
        try:
            photo = _insert(db, photo)
        except IntegrityError as exc:
            logger.warning(
                "photo insert collided (property_id=%s position=%s attempt=%s): %s",
                property_id, photo.position, attempt, exc.orig,
            )
            if attempt == attempts:
                raise ConflictError(
                    f"photo {payload.filename!r} collided with a concurrent write on property {property_id}"
                ) from exc
            continue
        logger.info(
            "created photo id=%s property_id=%s position=%s filename=%r",
            photo.id, photo.property_id, photo.position, photo.filename,
        )
        return photo


def delete_property(db: Session, property_id: int) -> bool:
    """Delete a property and every photo it owns in one transaction."""
    prop = get_property(db, property_id)
    if prop is None:
        return False
    db.delete(prop)
    db.commit()
    logger.info("deleted property id=%s", property_id)
    return True
