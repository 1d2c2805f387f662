"""Page-related schemas."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class PageSummary(BaseModel):
    """Page listing entry."""

    id: int
    slug: str
    title: str
    template: str


class MenuItemResponse(BaseModel):
    title: str
    url: str


class SiteConfigResponse(BaseModel):
    """Site configuration response."""

    title: str
    tagline: str
    pages: list[PageSummary]
    menus: dict[str, list[MenuItemResponse]]


class SubFieldResponse(BaseModel):
    key: str
    label: str
    kind: str


class FieldDefinitionResponse(BaseModel):
    """A field declaration as shown to editors."""

    key: str
    label: str
    type: Literal["scalar", "group"]
    kind: str | None = None
    fields: list[SubFieldResponse] = Field(default_factory=list)
    group_title: str | None = None
    add_button: str | None = None
    repeatable: bool | None = None
    sortable: bool | None = None


class PageFieldsResponse(BaseModel):
    """Schema and stored values of one page."""

    page_id: int
    template: str
    schema_id: str | None
    fields: list[FieldDefinitionResponse]
    values: dict[str, Any]


class PageFieldsUpdate(BaseModel):
    """Editor submission replacing every field value of a page."""

    values: dict[str, Any]
