"""Field value store backed by the page_fields_cache table."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from restsite.models.page import FieldValueCache

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from restsite.fields.schema import FieldValue

logger = logging.getLogger(__name__)


class SqlFieldValueStore:
    """Reads and writes JSON-encoded field values through an async session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def read_value(self, page_id: int, key: str) -> FieldValue | None:
        stmt = select(FieldValueCache.value).where(
            FieldValueCache.page_id == page_id,
            FieldValueCache.key == key,
        )
        raw = (await self._session.execute(stmt)).scalar_one_or_none()
        if raw is None:
            return None
        try:
            value: FieldValue = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupt stored value for page %d field %s", page_id, key)
            return None
        return value

    async def write_values(self, page_id: int, values: dict[str, FieldValue]) -> None:
        """Replace every stored value of a page.  The caller commits."""
        stmt = select(FieldValueCache).where(FieldValueCache.page_id == page_id)
        existing = {row.key: row for row in (await self._session.execute(stmt)).scalars()}
        for key, row in existing.items():
            if key not in values:
                await self._session.delete(row)
        for key, value in values.items():
            encoded = json.dumps(value, ensure_ascii=False)
            row = existing.get(key)
            if row is None:
                self._session.add(FieldValueCache(page_id=page_id, key=key, value=encoded))
            else:
                row.value = encoded
        await self._session.flush()
