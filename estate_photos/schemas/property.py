from __future__ import annotations
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from estate_photos.models.photo import CONTENT_TYPES, MAX_FILE_SIZE, MAX_FILENAME_LENGTH
from estate_photos.models.property import NAME_MIN_LENGTH, NAME_MAX_LENGTH
from estate_photos.utils.strings import norm_str


def _blank():
    return PydanticCustomError("blank", "can't be blank")


# --- Input pieces (what the catalog service accepts) ---
class PropertyCreate(BaseModel):
    name: str

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, v):
        name = norm_str(v)
        if name is None:
            raise _blank()
        if len(name) < NAME_MIN_LENGTH:
            raise PydanticCustomError(
                "too_short", "is too short (minimum is {min} characters)", {"min": NAME_MIN_LENGTH}
            )
        if len(name) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long", "is too long (maximum is {max} characters)", {"max": NAME_MAX_LENGTH}
            )
        return name


class PhotoCreate(BaseModel):
    filename: str
    content_type: str
    file_size: int
    position: Optional[int] = None

    @field_validator("filename", mode="before")
    @classmethod
    def _check_filename(cls, v):
        # stored byte-for-byte; no trimming or normalisation
        if not isinstance(v, str) or not v.strip():
            raise _blank()
        if len(v) > MAX_FILENAME_LENGTH:
            raise PydanticCustomError(
                "too_long", "is too long (maximum is {max} characters)", {"max": MAX_FILENAME_LENGTH}
            )
        if "/" in v or "\x00" in v or v in (".", ".."):
            raise PydanticCustomError("invalid", "is invalid")
        return v

    @field_validator("content_type")
    @classmethod
    def _check_content_type(cls, v: str) -> str:
        if v not in CONTENT_TYPES:
            raise PydanticCustomError("inclusion", "must be a valid image format")
        return v

    @field_validator("file_size")
    @classmethod
    def _check_file_size(cls, v: int) -> int:
        if not 0 < v < MAX_FILE_SIZE:
            raise PydanticCustomError("range", "must be between 1 byte and 10MB")
        return v

    @field_validator("position")
    @classmethod
    def _check_position(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise PydanticCustomError("greater_than", "must be greater than 0")
        return v


# --- Read-only pieces (show up in outputs) ---
class PhotoOut(BaseModel):
    id: int
    filename: str
    position: int
    content_type: str
    file_size: int
    url: str

    model_config = ConfigDict(from_attributes=True)


class PropertyOut(BaseModel):
    id: int
    name: str
    photo_count: int
    has_cover_photo: bool
    cover_photo_position: int
    cover_photo: Optional[PhotoOut] = None

    created_at: datetime
    updated_at: datetime

    photos: List[PhotoOut] = []

    model_config = ConfigDict(from_attributes=True)
