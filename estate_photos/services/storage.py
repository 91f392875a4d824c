"""Filesystem access for photo payloads.

Layout: ``<root>/photos/<property_id>/<filename>``, one flat directory per
property. Only read operations live here.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from estate_photos.core.config import settings
from estate_photos.core.exceptions import StorageUnavailable
from estate_photos.models.photo import Photo

logger = logging.getLogger(__name__)

PHOTOS_DIR = "photos"


@dataclass(frozen=True)
class StreamedPhoto:
    content: bytes
    content_type: str
    filename: str


class PhotoStorage:
    """Reads photo files beneath a storage root."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def property_dir(self, property_id: int) -> Path:
        return self.root / PHOTOS_DIR / str(property_id)

    def path_for(self, property_id: int, filename: str) -> Optional[Path]:
        """Path of a photo file, or None if ``filename`` would leave the property's directory."""
        if not filename or "\x00" in filename:
            return None
        base = self.property_dir(property_id).resolve()
        candidate = (base / filename).resolve()
        if candidate.parent != base:
            return None
        return candidate

    def stream(self, photo: Photo) -> Optional[StreamedPhoto]:
        path = self.path_for(photo.property_id, photo.filename)
        if path is None:
            logger.warning("photo id=%s resolves outside its directory", photo.id)
            return None
        try:
            content = path.read_bytes()
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            logger.warning("photo id=%s has no backing file at %s", photo.id, path)
            return None
        except OSError as exc:
            raise StorageUnavailable(f"cannot read photo id={photo.id}") from exc
        return StreamedPhoto(content=content, content_type=photo.content_type, filename=photo.filename)


def get_photo_storage() -> PhotoStorage:
    return PhotoStorage(settings.storage_root)
