from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from estate_photos.api.v1.photos import send_photo
from estate_photos.db.session import get_db
from estate_photos.schemas.property import PropertyOut
from estate_photos.services import catalog
from estate_photos.services.storage import PhotoStorage, get_photo_storage

router = APIRouter(
    prefix="/properties",
    tags=["properties"],
)


@router.get("", response_model=List[PropertyOut])
def list_properties(db: Session = Depends(get_db)):
    return catalog.list_properties(db)


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(property_id: int, db: Session = Depends(get_db)):
    prop = catalog.get_property(db, property_id)
    if not prop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")
    return prop


@router.get("/{property_id}/photos/{filename}", response_class=Response)
def show_property_photo(
    property_id: str,
    filename: str,
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    return send_photo(db, storage, property_id, filename)
