from __future__ import annotations
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, func

from estate_photos.db.base import Base
from estate_photos.services import cover

if TYPE_CHECKING:
    from estate_photos.models.photo import Photo

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), index=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # --- Relationships ---
    # lazy="select": the photo resolver loads a property without its gallery
    photos: Mapped[List["Photo"]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
        order_by="Photo.position",
        lazy="select",
    )

    # Derived from the photo set on every access, never cached.
    @property
    def photo_count(self) -> int:
        return len(self.photos)

    @property
    def cover_photo(self) -> Optional["Photo"]:
        return cover.cover_photo(self)

    @property
    def has_cover_photo(self) -> bool:
        return cover.has_cover_photo(self)

    @property
    def cover_photo_position(self) -> int:
        return cover.cover_photo_position(self)

    def __repr__(self) -> str:
        return f"<Property id={self.id} name={self.name!r}>"
