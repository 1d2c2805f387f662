"""TOML configuration reader/writer for index.toml, media.toml and page field files."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import tomli_w

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class PageConfig:
    """A page entry from index.toml."""

    id: int
    slug: str
    title: str
    template: str = "index"
    file: str | None = None
    menu_order: int = 0


@dataclass
class MenuItem:
    """A navigation menu entry pointing at a page slug or a literal URL."""

    title: str
    page: str | None = None
    url: str | None = None


@dataclass
class MenuConfig:
    """A registered navigation menu location."""

    location: str
    label: str
    items: list[MenuItem] = field(default_factory=list)


@dataclass
class StyleConfig:
    """A stylesheet enqueued on every page."""

    handle: str
    src: str
    version: str = ""
    media: str = "all"


@dataclass
class SiteConfig:
    """Parsed site configuration from index.toml."""

    title: str = "Rest"
    tagline: str = ""
    language: str = "pt-BR"
    address: str = ""
    phone: str = ""
    logo: str = "img/rest.png"
    front_page: str | None = None
    pages: list[PageConfig] = field(default_factory=list)
    menus: dict[str, MenuConfig] = field(default_factory=dict)
    styles: list[StyleConfig] = field(default_factory=list)


@dataclass
class MediaDef:
    """An uploaded media item from media.toml."""

    id: int
    file: str
    alt: str = ""
    sizes: dict[str, str] = field(default_factory=dict)


def _load_toml(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        logger.error("Invalid TOML in %s", path, exc_info=True)
        return None


def _parse_page(page_data: dict[str, Any]) -> PageConfig:
    for required in ("id", "slug"):
        if required not in page_data:
            msg = f"Page entry missing required '{required}' field: {page_data}"
            raise ValueError(msg)
    page_id = page_data["id"]
    if not isinstance(page_id, int) or isinstance(page_id, bool) or page_id <= 0:
        msg = f"Page id must be a positive integer: {page_id!r}"
        raise ValueError(msg)
    slug = str(page_data["slug"])
    return PageConfig(
        id=page_id,
        slug=slug,
        title=page_data.get("title", slug.replace("-", " ").title()),
        template=page_data.get("template", "index"),
        file=page_data.get("file"),
        menu_order=int(page_data.get("menu_order", 0)),
    )


def parse_site_config(content_dir: Path) -> SiteConfig:
    """Parse index.toml from the content directory.

    A missing or malformed file yields the default configuration.
    """
    data = _load_toml(content_dir / "index.toml")
    if data is None:
        return SiteConfig()

    site_data = data.get("site", {})
    try:
        pages = [_parse_page(p) for p in data.get("pages", [])]
    except (TypeError, ValueError):
        logger.error("Invalid page entry in index.toml", exc_info=True)
        return SiteConfig()

    menus: dict[str, MenuConfig] = {}
    menus_data = data.get("menus", {})
    if not isinstance(menus_data, dict):
        logger.warning("Ignoring menus: expected a table, got %r", menus_data)
        menus_data = {}
    for location, menu_data in menus_data.items():
        if not isinstance(menu_data, dict):
            logger.warning("Skipping menu %r: expected a table, got %r", location, menu_data)
            continue
        menus[location] = MenuConfig(
            location=location,
            label=str(menu_data.get("label", location)),
            items=[
                MenuItem(title=item["title"], page=item.get("page"), url=item.get("url"))
                for item in menu_data.get("items", [])
                if isinstance(item, dict) and "title" in item
            ],
        )

    styles = [
        StyleConfig(
            handle=s["handle"],
            src=s["src"],
            version=str(s.get("version", "")),
            media=s.get("media", "all"),
        )
        for s in data.get("styles", [])
        if "handle" in s and "src" in s
    ]

    return SiteConfig(
        title=site_data.get("title", "Rest"),
        tagline=site_data.get("tagline", ""),
        language=site_data.get("language", "pt-BR"),
        address=site_data.get("address", ""),
        phone=site_data.get("phone", ""),
        logo=site_data.get("logo", "img/rest.png"),
        front_page=site_data.get("front_page"),
        pages=pages,
        menus=menus,
        styles=styles,
    )


def parse_media_config(content_dir: Path) -> dict[int, MediaDef]:
    """Parse media.toml from the content directory.

    Returns a dict of media_id -> MediaDef.
    """
    data = _load_toml(content_dir / "media.toml")
    if data is None:
        return {}

    result: dict[int, MediaDef] = {}
    for entry in data.get("media", []):
        media_id = entry.get("id")
        if not isinstance(media_id, int) or "file" not in entry:
            logger.warning("Skipping media entry without id or file: %s", entry)
            continue
        result[media_id] = MediaDef(
            id=media_id,
            file=entry["file"],
            alt=entry.get("alt", ""),
            sizes={str(k): str(v) for k, v in entry.get("sizes", {}).items()},
        )
    return result


def parse_page_fields(path: Path) -> dict[str, Any]:
    """Parse the ``[fields]`` table of a page field file."""
    data = _load_toml(path)
    if data is None:
        return {}
    fields: dict[str, Any] = data.get("fields", {})
    return fields


def write_page_fields(path: Path, values: dict[str, Any]) -> None:
    """Write a page's field values to its field file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps({"fields": values}).encode("utf-8"))
