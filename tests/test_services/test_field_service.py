"""Tests for the field accessors used by templates."""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from restsite.services.field_service import (
    RenderContext,
    get_field,
    render_field_escaped,
    render_field_raw,
    render_value_raw,
)
from restsite.store.memory import MemoryFieldValueStore

_text = st.text(max_size=40)
_entries = st.lists(
    st.dictionaries(st.sampled_from(["name", "description", "price"]), _text),
    max_size=5,
)


@pytest.fixture
def store() -> MemoryFieldValueStore:
    return MemoryFieldValueStore(
        {
            5: {
                "dish-of-day-name": "Moqueca <b>baiana</b>",
                "dishes": [{"name": "Feijoada", "price": "45"}],
            },
            7: {"historia": "Desde 1990."},
        }
    )


class TestGetField:
    @pytest.mark.asyncio
    async def test_defaults_to_current_page(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        assert await get_field(ctx, "dish-of-day-name") == await get_field(
            ctx, "dish-of-day-name", 5
        )

    @pytest.mark.asyncio
    async def test_zero_and_none_mean_current_page(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=7, store=store)
        assert await get_field(ctx, "historia", 0) == "Desde 1990."
        assert await get_field(ctx, "historia", None) == "Desde 1990."

    @pytest.mark.asyncio
    async def test_explicit_page_id(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        assert await get_field(ctx, "historia", 7) == "Desde 1990."

    @pytest.mark.asyncio
    async def test_missing_value_is_none(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        assert await get_field(ctx, "historia") is None
        assert await get_field(ctx, "dishes", 99) is None

    @pytest.mark.asyncio
    async def test_group_value_returned_in_order(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        assert await get_field(ctx, "dishes") == [{"name": "Feijoada", "price": "45"}]

    @settings(max_examples=50, deadline=None)
    @given(page_id=st.integers(min_value=1, max_value=10_000), value=_text | _entries)
    def test_read_returns_written_value(self, page_id: int, value: object) -> None:
        store = MemoryFieldValueStore()
        store.write_value(page_id, "k", value)  # type: ignore[arg-type]
        ctx = RenderContext(page_id=page_id, store=store)
        explicit = asyncio.run(get_field(ctx, "k", page_id))
        implicit = asyncio.run(get_field(ctx, "k"))
        assert explicit == value
        assert implicit == value


class TestRenderField:
    @pytest.mark.asyncio
    async def test_raw_writes_markup_unchanged(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        await render_field_raw(ctx, "dish-of-day-name")
        assert ctx.out.getvalue() == "Moqueca <b>baiana</b>"

    @pytest.mark.asyncio
    async def test_escaped_writes_entities(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        await render_field_escaped(ctx, "dish-of-day-name")
        assert ctx.out.getvalue() == "Moqueca &lt;b&gt;baiana&lt;/b&gt;"

    @pytest.mark.asyncio
    async def test_missing_value_writes_nothing(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        await render_field_raw(ctx, "historia")
        await render_field_escaped(ctx, "historia")
        assert ctx.out.getvalue() == ""

    @pytest.mark.asyncio
    async def test_group_value_writes_nothing(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        await render_field_raw(ctx, "dishes")
        assert ctx.out.getvalue() == ""

    def test_render_value_raw_handles_none(self, store: MemoryFieldValueStore) -> None:
        ctx = RenderContext(page_id=5, store=store)
        render_value_raw(ctx, None)
        render_value_raw(ctx, "<i>ok</i>")
        assert ctx.out.getvalue() == "<i>ok</i>"
