"""Page service: page lookup, site configuration and editor field saves."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from restsite.exceptions import FieldValidationError, InternalServerError
from restsite.fields.schema import GroupField, ScalarField
from restsite.models.page import PageCache
from restsite.schemas.page import (
    FieldDefinitionResponse,
    MenuItemResponse,
    PageFieldsResponse,
    PageSummary,
    SiteConfigResponse,
    SubFieldResponse,
)
from restsite.store.sql import SqlFieldValueStore

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from restsite.fields.registry import SchemaRegistry
    from restsite.fields.schema import FieldDefinition, FieldSchema
    from restsite.filesystem.content_manager import ContentManager
    from restsite.filesystem.toml_manager import MenuItem, SiteConfig

logger = logging.getLogger(__name__)


def page_url(slug: str, site: SiteConfig) -> str:
    """Public URL of a page; the front page lives at the site root."""
    if slug == site.front_page:
        return "/"
    return f"/{slug}"


def menu_item_url(item: MenuItem, site: SiteConfig) -> str:
    if item.url is not None:
        return item.url
    if item.page is not None:
        return page_url(item.page, site)
    return "#"


def get_site_config(content_manager: ContentManager) -> SiteConfigResponse:
    """Get the site configuration for API clients."""
    cfg = content_manager.site_config
    return SiteConfigResponse(
        title=cfg.title,
        tagline=cfg.tagline,
        pages=[
            PageSummary(id=p.id, slug=p.slug, title=p.title, template=p.template)
            for p in sorted(cfg.pages, key=lambda page: page.menu_order)
        ],
        menus={
            location: [
                MenuItemResponse(title=item.title, url=menu_item_url(item, cfg))
                for item in menu.items
            ]
            for location, menu in cfg.menus.items()
        },
    )


async def get_page_by_slug(session: AsyncSession, slug: str) -> PageCache | None:
    stmt = select(PageCache).where(PageCache.slug == slug)
    return (await session.execute(stmt)).scalar_one_or_none()


async def get_page_by_id(session: AsyncSession, page_id: int) -> PageCache | None:
    return await session.get(PageCache, page_id)


def describe_field(definition: FieldDefinition) -> FieldDefinitionResponse:
    """Describe a field declaration for the editor form."""
    match definition:
        case ScalarField():
            return FieldDefinitionResponse(
                key=definition.key,
                label=definition.label,
                type="scalar",
                kind=str(definition.kind),
            )
        case GroupField():
            return FieldDefinitionResponse(
                key=definition.key,
                label=definition.label,
                type="group",
                fields=[
                    SubFieldResponse(key=f.key, label=f.label, kind=str(f.kind))
                    for f in definition.fields
                ],
                group_title=definition.options.group_title,
                add_button=definition.options.add_button,
                repeatable=definition.options.repeatable,
                sortable=definition.options.sortable,
            )


async def _read_values(
    store: SqlFieldValueStore, page_id: int, schema: FieldSchema | None
) -> dict[str, Any]:
    if schema is None:
        return {}
    values: dict[str, Any] = {}
    for key in schema.keys:
        value = await store.read_value(page_id, key)
        if value is not None:
            values[key] = value
    return values


async def get_page_fields(
    session: AsyncSession, registry: SchemaRegistry, page_id: int
) -> PageFieldsResponse | None:
    """Get the field schema and stored values of a page."""
    page = await get_page_by_id(session, page_id)
    if page is None:
        return None
    schema = registry.schema_for(page.template)
    store = SqlFieldValueStore(session)
    return PageFieldsResponse(
        page_id=page.id,
        template=page.template,
        schema_id=schema.schema_id if schema is not None else None,
        fields=[describe_field(f) for f in schema.fields] if schema is not None else [],
        values=await _read_values(store, page.id, schema),
    )


async def save_page_fields(
    session: AsyncSession,
    content_manager: ContentManager,
    registry: SchemaRegistry,
    page_id: int,
    raw_values: dict[str, Any],
) -> PageFieldsResponse | None:
    """Validate and persist an editor's field values for a page.

    The content directory is written first; the cache follows so that a
    failed write never leaves the database ahead of the files.
    """
    page = await get_page_by_id(session, page_id)
    if page is None:
        return None
    schema = registry.schema_for(page.template)
    if schema is None:
        msg = f"Template '{page.template}' declares no fields"
        raise FieldValidationError(msg)

    values = schema.validate_values(raw_values)
    page_cfg = content_manager.find_page(page_id=page_id)
    if page_cfg is None:
        msg = f"Page {page_id} is cached but missing from index.toml"
        raise InternalServerError(msg)
    content_manager.write_page_fields(page_cfg, dict(values))

    store = SqlFieldValueStore(session)
    await store.write_values(page_id, values)
    await session.commit()
    logger.info("Updated fields %s for page %d", sorted(values), page_id)
    return await get_page_fields(session, registry, page_id)
