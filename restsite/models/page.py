"""Page and page field cache models."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restsite.models.base import Base


class PageCache(Base):
    """Cached page metadata (regenerated from index.toml)."""

    __tablename__ = "pages_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    template: Mapped[str] = mapped_column(String, nullable=False, default="index")
    content: Mapped[str | None] = mapped_column(Text, nullable=True)

    field_values: Mapped[list[FieldValueCache]] = relationship(
        back_populates="page", cascade="all, delete-orphan"
    )


class FieldValueCache(Base):
    """One stored field value for a page.

    ``value`` holds JSON: a string for scalar fields, a list of objects for
    group fields.
    """

    __tablename__ = "page_fields_cache"

    page_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pages_cache.id", ondelete="CASCADE"),
        primary_key=True,
    )
    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    page: Mapped[PageCache] = relationship(back_populates="field_values")

    __table_args__ = (Index("idx_page_fields_key", "key"),)
