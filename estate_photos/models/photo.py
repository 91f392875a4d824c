from __future__ import annotations
from datetime import datetime
from urllib.parse import quote

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    Integer, String, ForeignKey, DateTime, func, UniqueConstraint, CheckConstraint, Index
)

from estate_photos.db.base import Base

CONTENT_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_FILE_SIZE = 10 * 1024 * 1024  # exclusive upper bound, bytes
MAX_FILENAME_LENGTH = 255


class Photo(Base):
    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(primary_key=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"), index=True, nullable=False
    )

    filename: Mapped[str] = mapped_column(String(MAX_FILENAME_LENGTH), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    content_type: Mapped[str] = mapped_column(String(32), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    listing = relationship("Property", back_populates="photos")

    __table_args__ = (
        UniqueConstraint("property_id", "position", name="uq_photos_property_position"),
        UniqueConstraint("property_id", "filename", name="uq_photos_property_filename"),
        CheckConstraint("position > 0", name="photos_position_positive"),
        CheckConstraint("file_size > 0", name="photos_file_size_positive"),
        Index("ix_photos_property_id_position", "property_id", "position"),
    )

    @property
    def url(self) -> str:
        return f"/photos/{self.property_id}/{quote(self.filename, safe='')}"

    def __repr__(self) -> str:
        return f"<Photo id={self.id} property_id={self.property_id} position={self.position} filename={self.filename!r}>"
