"""Field definition model.

A page template owns one ``FieldSchema``: an ordered collection of field
definitions.  A definition is either a ``ScalarField`` (one value) or a
``GroupField`` (an ordered list of entries, each entry a mapping of sub-field
key to scalar value).  Consumers dispatch on the concrete class::

    match definition:
        case ScalarField():
            ...
        case GroupField():
            ...

Stored values are always strings for scalar fields, including file fields,
which hold the asset id as a string of digits.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from restsite.exceptions import FieldValidationError, SchemaError

if TYPE_CHECKING:
    from collections.abc import Iterable

GroupEntry = dict[str, str]
FieldValue = str | list[GroupEntry]

_KEY_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
_POSITION_PLACEHOLDER = "{#}"
_ASSET_ID_RE = re.compile(r"[0-9]{1,19}")

# asset ids are SQLite INTEGER primary keys
MAX_ASSET_ID = 2**63 - 1


class FieldKind(enum.StrEnum):
    """Value kind of a scalar field."""

    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    FILE = "file"


def _check_key(key: str) -> None:
    if not _KEY_RE.match(key):
        msg = f"Invalid field key: {key!r}"
        raise SchemaError(msg)


def parse_asset_id(value: object) -> int | None:
    """Return the asset id held by a stored file value, or None if it holds none.

    Accepts positive ints and ASCII digit strings within the INTEGER range.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not _ASSET_ID_RE.fullmatch(value):
            return None
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_ASSET_ID:
        return value
    return None

@dataclass(frozen=True)
class ScalarField:
    """A single-valued field."""

    key: str
    label: str
    kind: FieldKind = FieldKind.SHORT_TEXT

    def __post_init__(self) -> None:
        _check_key(self.key)

    def normalize(self, raw: Any) -> str:
        """Coerce an editor-supplied value to its stored string form."""
        if self.kind is FieldKind.FILE:
            # bool is an int subclass; True is not an asset id
            if isinstance(raw, int) and not isinstance(raw, bool):
                if parse_asset_id(raw) is not None:
                    return str(raw)
            elif raw == "" or parse_asset_id(raw) is not None:
                return raw
            msg = f"Field '{self.key}' expects an asset id, got {raw!r}"
            raise FieldValidationError(msg)
        if not isinstance(raw, str):
            msg = f"Field '{self.key}' expects text, got {type(raw).__name__}"
            raise FieldValidationError(msg)
        return raw


@dataclass(frozen=True)
class GroupOptions:
    """Admin presentation hints for a group field.

    They never change the stored data shape.
    """

    group_title: str = "Entry {#}"
    add_button: str = "Add entry"
    repeatable: bool = True
    sortable: bool = False

    def entry_title(self, position: int) -> str:
        """Return the display title of the entry at 1-based ``position``."""
        return self.group_title.replace(_POSITION_PLACEHOLDER, str(position))


@dataclass(frozen=True)
class GroupField:
    """An ordered, repeatable collection of entries with scalar sub-fields."""

    key: str
    label: str
    fields: tuple[ScalarField, ...]
    options: GroupOptions = field(default_factory=GroupOptions)

    def __post_init__(self) -> None:
        _check_key(self.key)
        if not self.fields:
            msg = f"Group '{self.key}' declares no sub-fields"
            raise SchemaError(msg)
        _check_unique(f.key for f in self.fields)

    @property
    def sub_keys(self) -> tuple[str, ...]:
        return tuple(f.key for f in self.fields)

    def normalize(self, raw: Any) -> list[GroupEntry]:
        """Coerce a list of editor-supplied entries, preserving their order."""
        if not isinstance(raw, list):
            msg = f"Group '{self.key}' expects a list of entries"
            raise FieldValidationError(msg)
        if not self.options.repeatable and len(raw) > 1:
            msg = f"Group '{self.key}' accepts a single entry"
            raise FieldValidationError(msg)

        by_key = {f.key: f for f in self.fields}
        entries: list[GroupEntry] = []
        for position, item in enumerate(raw, start=1):
            if not isinstance(item, dict):
                msg = f"Group '{self.key}' entry {position} must be a mapping"
                raise FieldValidationError(msg)
            unknown = sorted(set(item) - set(by_key))
            if unknown:
                msg = f"Group '{self.key}' entry {position} has unknown keys: {', '.join(unknown)}"
                raise FieldValidationError(msg)
            entries.append({k: by_key[k].normalize(v) for k, v in item.items()})
        return entries


FieldDefinition = ScalarField | GroupField


def _check_unique(keys: Iterable[str]) -> None:
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            msg = f"Duplicate field key: {key!r}"
            raise SchemaError(msg)
        seen.add(key)


@dataclass(frozen=True)
class FieldSchema:
    """Ordered field definitions scoped to one page template."""

    schema_id: str
    title: str
    fields: tuple[FieldDefinition, ...]

    def __post_init__(self) -> None:
        _check_unique(f.key for f in self.fields)

    def get(self, key: str) -> FieldDefinition | None:
        return next((f for f in self.fields if f.key == key), None)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(f.key for f in self.fields)

    def validate_values(self, values: dict[str, Any]) -> dict[str, FieldValue]:
        """Validate editor input against this schema.

        Returns the values in their stored form.  Raises ``FieldValidationError``
        on the first key or value that does not fit.
        """
        result: dict[str, FieldValue] = {}
        for key, raw in values.items():
            definition = self.get(key)
            if definition is None:
                msg = f"Unknown field '{key}' for schema '{self.schema_id}'"
                raise FieldValidationError(msg)
            result[key] = definition.normalize(raw)
        return result


@dataclass(frozen=True)
class PageTemplate:
    """A rendering template and the schema its pages carry."""

    template_id: str
    name: str
    schema_id: str
