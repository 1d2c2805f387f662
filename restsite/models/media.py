"""Media cache models."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restsite.models.base import Base


class MediaCache(Base):
    """Cached uploaded media item (regenerated from media.toml)."""

    __tablename__ = "media_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    file: Mapped[str] = mapped_column(Text, nullable=False)
    alt: Mapped[str] = mapped_column(Text, nullable=False, default="")

    sizes: Mapped[list[MediaSizeCache]] = relationship(
        back_populates="media", cascade="all, delete-orphan"
    )


class MediaSizeCache(Base):
    """A resized rendition of a media item."""

    __tablename__ = "media_sizes_cache"

    media_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("media_cache.id", ondelete="CASCADE"),
        primary_key=True,
    )
    size: Mapped[str] = mapped_column(String, primary_key=True)
    file: Mapped[str] = mapped_column(Text, nullable=False)

    media: Mapped[MediaCache] = relationship(back_populates="sizes")
