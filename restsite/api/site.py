"""Public HTML pages rendered by the theme."""

from __future__ import annotations

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from restsite.api.deps import get_content_manager, get_session, get_settings
from restsite.config import Settings
from restsite.filesystem.content_manager import ContentManager
from restsite.models.page import PageCache
from restsite.services.asset_service import AssetResolver
from restsite.services.field_service import RenderContext
from restsite.services.page_service import get_page_by_slug
from restsite.store.sql import SqlFieldValueStore
from restsite.theme.templates import ThemeEnv, render_not_found, render_page

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

router = APIRouter(tags=["site"])


def _theme_env(
    session: AsyncSession, content_manager: ContentManager, settings: Settings
) -> ThemeEnv:
    return ThemeEnv(
        site=content_manager.site_config,
        settings=settings,
        assets=AssetResolver(session, settings.uploads_url),
    )


async def _render(
    page: PageCache,
    session: AsyncSession,
    content_manager: ContentManager,
    settings: Settings,
) -> HTMLResponse:
    ctx = RenderContext(page_id=page.id, store=SqlFieldValueStore(session))
    env = _theme_env(session, content_manager, settings)
    return HTMLResponse(await render_page(page, ctx, env))


def _not_found(
    request: Request,
    session: AsyncSession,
    content_manager: ContentManager,
    settings: Settings,
) -> HTMLResponse:
    logger.debug("No page for %s", request.url.path)
    env = _theme_env(session, content_manager, settings)
    return HTMLResponse(render_not_found(env, request.url.path), status_code=404)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def front_page(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    """Render the configured front page."""
    slug = content_manager.site_config.front_page
    page = await get_page_by_slug(session, slug) if slug else None
    if page is None:
        logger.warning("Front page %r is not an indexed page", slug)
        return _not_found(request, session, content_manager, settings)
    return await _render(page, session, content_manager, settings)


@router.get("/{slug}", response_class=HTMLResponse, include_in_schema=False)
async def page_by_slug(
    slug: str,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    """Render a page by its slug."""
    page = await get_page_by_slug(session, slug) if _SLUG_PATTERN.match(slug) else None
    if page is None:
        return _not_found(request, session, content_manager, settings)
    return await _render(page, session, content_manager, settings)
