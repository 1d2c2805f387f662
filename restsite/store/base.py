"""Read interface of the field value store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from restsite.fields.schema import FieldValue


class FieldValueStore(Protocol):
    async def read_value(self, page_id: int, key: str) -> FieldValue | None:
        """Return the stored value for (page_id, key), or None if never set."""
        ...
