"""Field accessors used by page templates.

Every accessor takes an explicit ``RenderContext`` carrying the id of the
page being rendered; a ``page_id`` of 0 (the default) means "that page".
Absent values are never an error: ``get_field`` returns None and the render
helpers write nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from restsite.theme.buffer import HtmlBuffer

if TYPE_CHECKING:
    from restsite.fields.schema import FieldValue
    from restsite.store.base import FieldValueStore

logger = logging.getLogger(__name__)

CURRENT_PAGE = 0


@dataclass
class RenderContext:
    """State of a single render pass."""

    page_id: int
    store: FieldValueStore
    out: HtmlBuffer = field(default_factory=HtmlBuffer)

    def resolve_page_id(self, page_id: int | None) -> int:
        if not page_id:
            return self.page_id
        return page_id


async def get_field(
    ctx: RenderContext, key: str, page_id: int | None = CURRENT_PAGE
) -> FieldValue | None:
    """Return the stored value of ``key`` unchanged, or None if never set."""
    resolved = ctx.resolve_page_id(page_id)
    value = await ctx.store.read_value(resolved, key)
    if value is None:
        logger.debug("Field %s not set for page %d", key, resolved)
    return value


def _string_form(key: str, value: FieldValue | None) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        logger.warning("Group field %s cannot be rendered as text", key)
        return ""
    return value


async def render_field_raw(
    ctx: RenderContext, key: str, page_id: int | None = CURRENT_PAGE
) -> None:
    """Write a field value to the output without escaping.

    Field values come from trusted editors and may carry markup.  Use
    ``render_field_escaped`` for anything that may hold untrusted input.
    """
    value = await get_field(ctx, key, page_id)
    ctx.out.raw(_string_form(key, value))


async def render_field_escaped(
    ctx: RenderContext, key: str, page_id: int | None = CURRENT_PAGE
) -> None:
    """Write a field value to the output with HTML escaping."""
    value = await get_field(ctx, key, page_id)
    ctx.out.text(_string_form(key, value))


def render_value_raw(ctx: RenderContext, value: str | None) -> None:
    """Write an already-fetched editor value without escaping.

    Used for group sub-fields, which templates read through ``get_field``
    before iterating.
    """
    ctx.out.raw(value or "")
