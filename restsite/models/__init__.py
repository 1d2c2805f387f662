"""SQLAlchemy ORM models for the Rest site."""

from restsite.models.base import Base
from restsite.models.media import MediaCache, MediaSizeCache
from restsite.models.page import FieldValueCache, PageCache

__all__ = [
    "Base",
    "FieldValueCache",
    "MediaCache",
    "MediaSizeCache",
    "PageCache",
]
