"""Resolve stored asset ids to public URLs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from restsite.fields.schema import parse_asset_id
from restsite.models.media import MediaCache

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class AssetResolver:
    """Looks up media renditions in the media cache."""

    def __init__(self, session: AsyncSession, uploads_url: str) -> None:
        self._session = session
        self._uploads_url = uploads_url.rstrip("/")

    async def image_src(self, asset_id: object, size: str = "medium") -> str | None:
        """Return the URL of the ``size`` rendition of an asset.

        Falls back to the original file when that rendition does not exist.
        Returns None when the id does not name a known media item.
        """
        media_id = parse_asset_id(asset_id)
        if media_id is None:
            return None

        stmt = (
            select(MediaCache)
            .where(MediaCache.id == media_id)
            .options(selectinload(MediaCache.sizes))
        )
        media = (await self._session.execute(stmt)).scalar_one_or_none()
        if media is None:
            logger.warning("Asset %d not found", media_id)
            return None

        rendition = next((s.file for s in media.sizes if s.size == size), None)
        if rendition is None:
            logger.debug("Asset %d has no %s rendition, using original", media_id, size)
            rendition = media.file
        return f"{self._uploads_url}/{rendition.lstrip('/')}"
