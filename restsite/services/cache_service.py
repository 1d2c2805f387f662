"""Database cache regeneration from the content directory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete

from restsite.exceptions import FieldValidationError
from restsite.models.media import MediaCache, MediaSizeCache
from restsite.models.page import FieldValueCache, PageCache
from restsite.store.sql import SqlFieldValueStore

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from restsite.fields.registry import SchemaRegistry
    from restsite.fields.schema import FieldSchema, FieldValue
    from restsite.filesystem.content_manager import ContentManager

logger = logging.getLogger(__name__)


def _load_field_values(
    schema: FieldSchema, raw_values: dict[str, Any], slug: str, warnings: list[str]
) -> dict[str, FieldValue]:
    """Validate stored values one key at a time, dropping the ones that do not fit."""
    values: dict[str, FieldValue] = {}
    for key, raw in raw_values.items():
        try:
            values.update(schema.validate_values({key: raw}))
        except FieldValidationError as exc:
            msg = f"Page {slug}: skipped field '{key}': {exc}"
            logger.warning(msg)
            warnings.append(msg)
    return values


async def rebuild_cache(
    session: AsyncSession, content_manager: ContentManager, registry: SchemaRegistry
) -> tuple[int, list[str]]:
    """Rebuild all cache tables from the content directory.

    Returns a tuple of (page_count, warnings) where warnings describe pages
    and page fields that were skipped because they could not be loaded or do
    not match the page's schema.
    """
    await session.execute(delete(FieldValueCache))
    await session.execute(delete(PageCache))
    await session.execute(delete(MediaSizeCache))
    await session.execute(delete(MediaCache))
    # Rows loaded by an earlier rebuild would clash with the fresh ones
    session.expunge_all()

    for media_def in content_manager.media.values():
        session.add(
            MediaCache(
                id=media_def.id,
                file=media_def.file,
                alt=media_def.alt,
                sizes=[MediaSizeCache(size=k, file=v) for k, v in media_def.sizes.items()],
            )
        )

    warnings: list[str] = []
    store = SqlFieldValueStore(session)
    page_count = 0
    seen_ids: set[int] = set()
    seen_slugs: set[str] = set()
    for page_cfg in content_manager.site_config.pages:
        if page_cfg.id in seen_ids or page_cfg.slug in seen_slugs:
            msg = f"Duplicate page id or slug: {page_cfg.id} ({page_cfg.slug})"
            logger.warning(msg)
            warnings.append(msg)
            continue
        seen_ids.add(page_cfg.id)
        seen_slugs.add(page_cfg.slug)
        try:
            content = content_manager.read_page_content(page_cfg)
            raw_values = content_manager.read_page_fields(page_cfg)
        except ValueError as exc:
            msg = f"Skipping page {page_cfg.slug}: {exc}"
            logger.warning(msg)
            warnings.append(msg)
            continue
        session.add(
            PageCache(
                id=page_cfg.id,
                slug=page_cfg.slug,
                title=page_cfg.title,
                template=page_cfg.template,
                content=content,
            )
        )
        await session.flush()
        page_count += 1

        if not raw_values:
            continue
        schema = registry.schema_for(page_cfg.template)
        if schema is None:
            msg = f"Page {page_cfg.slug}: template '{page_cfg.template}' declares no fields"
            logger.warning(msg)
            warnings.append(msg)
            continue
        values = _load_field_values(schema, raw_values, page_cfg.slug, warnings)
        await store.write_values(page_cfg.id, values)

    await session.commit()
    return page_count, warnings
