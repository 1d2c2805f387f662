"""Page API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from restsite.api.deps import (
    get_content_manager,
    get_registry,
    get_session,
    require_editor,
)
from restsite.fields.registry import SchemaRegistry
from restsite.filesystem.content_manager import ContentManager
from restsite.schemas.page import PageFieldsResponse, PageFieldsUpdate, SiteConfigResponse
from restsite.services.page_service import get_page_fields, get_site_config, save_page_fields

router = APIRouter(prefix="/api/pages", tags=["pages"])


@router.get("", response_model=SiteConfigResponse)
async def site_config(
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> SiteConfigResponse:
    """Get site configuration including page list and menus."""
    return get_site_config(content_manager)


@router.get("/{page_id}/fields", response_model=PageFieldsResponse)
async def get_page_fields_endpoint(
    page_id: Annotated[int, Path(gt=0)],
    session: Annotated[AsyncSession, Depends(get_session)],
    registry: Annotated[SchemaRegistry, Depends(get_registry)],
) -> PageFieldsResponse:
    """Get the field schema and stored values of a page."""
    fields = await get_page_fields(session, registry, page_id)
    if fields is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return fields


@router.put(
    "/{page_id}/fields",
    response_model=PageFieldsResponse,
    dependencies=[Depends(require_editor)],
)
async def update_page_fields_endpoint(
    page_id: Annotated[int, Path(gt=0)],
    body: PageFieldsUpdate,
    session: Annotated[AsyncSession, Depends(get_session)],
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
    registry: Annotated[SchemaRegistry, Depends(get_registry)],
) -> PageFieldsResponse:
    """Replace the field values of a page."""
    fields = await save_page_fields(session, content_manager, registry, page_id, body.values)
    if fields is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return fields
