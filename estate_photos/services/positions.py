from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from estate_photos.models.photo import Photo


def next_position(db: Session, property_id: int) -> int:
    """max(position) + 1 over the property's stored photos, or 1 when it has none.

    Reads what the database holds; pending objects in the session are not
    counted (the session factory runs with autoflush off).
    """
    current = db.execute(
        select(func.max(Photo.position)).where(Photo.property_id == property_id)
    ).scalar_one()
    return (current or 0) + 1
