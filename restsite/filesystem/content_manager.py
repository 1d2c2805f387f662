"""Content directory reader and writer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from restsite.filesystem.toml_manager import (
    MediaDef,
    PageConfig,
    SiteConfig,
    parse_media_config,
    parse_page_fields,
    parse_site_config,
    write_page_fields,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_INDEX_TOML = """\
[site]
title = "Rest"
address = "Rua Marechal 29 – Copacabana – Rj"
phone = "2422-9201"
front_page = "menu"

[[pages]]
id = 5
slug = "menu"
title = "Menu da Semana"
template = "home"

[[pages]]
id = 7
slug = "sobre"
title = "Sobre"
template = "about"

[[pages]]
id = 9
slug = "contato"
title = "Contato"

[menus.header-menu]
label = "Menu Header"

[[menus.header-menu.items]]
title = "Menu"
url = "/"

[[menus.header-menu.items]]
title = "Sobre"
page = "sobre"

[[menus.header-menu.items]]
title = "Contato"
page = "contato"

[[styles]]
handle = "rest-style"
src = "style.css"
version = "1.0.0"
media = "all"
"""


@dataclass
class ContentManager:
    """Manages reading and writing content files."""

    content_dir: Path
    _site_config: SiteConfig | None = field(default=None, repr=False)
    _media: dict[int, MediaDef] | None = field(default=None, repr=False)

    @property
    def site_config(self) -> SiteConfig:
        """Get site configuration, loading if needed."""
        if self._site_config is None:
            self._site_config = parse_site_config(self.content_dir)
        return self._site_config

    @property
    def media(self) -> dict[int, MediaDef]:
        """Get media definitions, loading if needed."""
        if self._media is None:
            self._media = parse_media_config(self.content_dir)
        return self._media

    def reload_config(self) -> None:
        """Reload site and media configuration from disk."""
        self._site_config = parse_site_config(self.content_dir)
        self._media = parse_media_config(self.content_dir)

    def _validate_path(self, rel_path: str) -> Path:
        """Validate that a relative path stays within the content directory.

        Raises ValueError if the resolved path escapes content_dir.
        """
        full_path = (self.content_dir / rel_path).resolve()
        if not full_path.is_relative_to(self.content_dir.resolve()):
            raise ValueError(f"Path traversal detected: {rel_path}")
        return full_path

    def find_page(
        self, *, page_id: int | None = None, slug: str | None = None
    ) -> PageConfig | None:
        for page_cfg in self.site_config.pages:
            if page_id is not None and page_cfg.id == page_id:
                return page_cfg
            if slug is not None and page_cfg.slug == slug:
                return page_cfg
        return None

    def read_page_content(self, page: PageConfig) -> str | None:
        """Read the body of a page, or None if it has no content file."""
        if not page.file:
            return None
        page_path = self._validate_path(page.file)
        if not page_path.is_file():
            logger.warning("Content file %s for page %s does not exist", page.file, page.slug)
            return None
        return page_path.read_text(encoding="utf-8")

    def page_fields_path(self, page: PageConfig) -> Path:
        return self._validate_path(f"fields/{page.slug}.toml")

    def read_page_fields(self, page: PageConfig) -> dict[str, Any]:
        """Read the raw field values stored for a page."""
        return parse_page_fields(self.page_fields_path(page))

    def write_page_fields(self, page: PageConfig, values: dict[str, Any]) -> None:
        """Replace the stored field values of a page."""
        write_page_fields(self.page_fields_path(page), values)
        logger.info("Saved %d field(s) for page %s", len(values), page.slug)


def ensure_content_dir(content_dir: Path) -> None:
    """Ensure required content scaffold entries exist without overwriting existing files."""
    if content_dir.exists() and not content_dir.is_dir():
        msg = f"Content path exists but is not a directory: {content_dir}"
        raise NotADirectoryError(msg)

    if not content_dir.exists():
        logger.info("Creating default content directory at %s", content_dir)
        content_dir.mkdir(parents=True)

    for name in ("fields", "pages", "uploads"):
        sub_dir = content_dir / name
        if not sub_dir.exists():
            sub_dir.mkdir()
            logger.info("Created missing content scaffold directory: %s", sub_dir)

    index_toml = content_dir / "index.toml"
    if not index_toml.exists():
        index_toml.write_text(_DEFAULT_INDEX_TOML, encoding="utf-8")
        logger.info("Created missing content scaffold file: %s", index_toml)
