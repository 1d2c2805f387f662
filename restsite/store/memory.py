"""In-memory field value store for previews and tests."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restsite.fields.schema import FieldValue


class MemoryFieldValueStore:
    """Dict-backed store.  Returned values are copies of what was written."""

    def __init__(self, values: dict[int, dict[str, FieldValue]] | None = None) -> None:
        self._values: dict[int, dict[str, FieldValue]] = copy.deepcopy(values or {})

    async def read_value(self, page_id: int, key: str) -> FieldValue | None:
        value = self._values.get(page_id, {}).get(key)
        return copy.deepcopy(value)

    def write_value(self, page_id: int, key: str, value: FieldValue) -> None:
        self._values.setdefault(page_id, {})[key] = copy.deepcopy(value)
