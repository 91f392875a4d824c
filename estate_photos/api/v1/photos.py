from __future__ import annotations
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from estate_photos.core.exceptions import NotFound
from estate_photos.db.session import get_db
from estate_photos.services.resolver import resolve_photo
from estate_photos.services.storage import PhotoStorage, get_photo_storage

router = APIRouter(tags=["photos"])


def _quoted_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _inline_disposition(filename: str) -> str:
    if filename.isascii() and filename.isprintable():
        return f"inline; filename={_quoted_string(filename)}"
    # non-ASCII: ASCII fallback for old clients, RFC 5987 form for the rest
    fallback = "".join(c if c.isascii() and c.isprintable() else "_" for c in filename)
    return f"inline; filename={_quoted_string(fallback)}; filename*=utf-8''{quote(filename, safe='')}"


def send_photo(db: Session, storage: PhotoStorage, property_id: str, filename: str) -> Response:
    photo = resolve_photo(db, property_id, filename)
    if photo is None:
        raise NotFound()

    streamed = storage.stream(photo)
    if streamed is None:
        raise NotFound()

    return Response(
        content=streamed.content,
        media_type=streamed.content_type,
        headers={"Content-Disposition": _inline_disposition(streamed.filename)},
    )


# property_id stays a string: malformed ids must 404 like every other miss
@router.get("/photos/{property_id}/{filename}", response_class=Response)
def show_photo(
    property_id: str,
    filename: str,
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    return send_photo(db, storage, property_id, filename)
