"""Field value storage keyed by (page id, field key)."""

from restsite.store.base import FieldValueStore
from restsite.store.memory import MemoryFieldValueStore
from restsite.store.sql import SqlFieldValueStore

__all__ = ["FieldValueStore", "MemoryFieldValueStore", "SqlFieldValueStore"]
