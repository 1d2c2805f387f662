"""Site header and footer shared by every page template."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from restsite.services.page_service import menu_item_url

if TYPE_CHECKING:
    from restsite.config import Settings
    from restsite.filesystem.toml_manager import SiteConfig, StyleConfig
    from restsite.theme.buffer import HtmlBuffer

HEADER_MENU = "header-menu"


def theme_asset_url(settings: Settings, src: str) -> str:
    """URL of a file shipped with the theme; absolute URLs pass through."""
    if src.startswith(("http://", "https://", "/")):
        return src
    return f"{settings.theme_url.rstrip('/')}/{src}"


def _style_tag(settings: Settings, style: StyleConfig) -> str:
    href = theme_asset_url(settings, style.src)
    if style.version:
        href = f"{href}?ver={style.version}"
    return (
        f"<link rel='stylesheet' id='{html.escape(style.handle)}-css' "
        f"href='{html.escape(href)}' type='text/css' media='{html.escape(style.media)}' />"
    )


def render_header(
    out: HtmlBuffer, site: SiteConfig, settings: Settings, current_url: str, template: str
) -> None:
    """Write the document head and the site header."""
    out.raw("<!DOCTYPE html>\n")
    out.raw(f'<html lang="{html.escape(site.language)}">\n<head>\n')
    out.raw('<meta charset="utf-8">\n<title>')
    out.text(site.title)
    out.raw("</title>\n")
    if settings.font_url:
        out.raw(
            f"<link href='{html.escape(settings.font_url)}' rel='stylesheet' type='text/css'>\n"
        )
    for style in site.styles:
        out.raw(_style_tag(settings, style) + "\n")
    out.raw("</head>\n")
    out.raw(f'<body class="page page-template-{html.escape(template)}">\n<header>\n')

    menu = site.menus.get(HEADER_MENU)
    if menu is not None:
        out.raw("<nav>\n<ul>\n")
        for item in menu.items:
            url = menu_item_url(item, site)
            css = ' class="current_page_item"' if url == current_url else ""
            out.raw(f'<li{css}><a href="{html.escape(url)}">')
            out.text(item.title)
            out.raw("</a></li>\n")
        out.raw("</ul>\n</nav>\n")

    logo = html.escape(theme_asset_url(settings, site.logo))
    out.raw(f'<h1><img src="{logo}" alt="{html.escape(site.title)}"></h1>\n')
    if site.address:
        out.raw("<p>")
        out.text(site.address)
        out.raw("</p>\n")
    if site.phone:
        out.raw('<p class="telefone">')
        out.text(site.phone)
        out.raw("</p>\n")
    out.raw("</header>\n")


def render_footer(out: HtmlBuffer, site: SiteConfig) -> None:
    out.raw("<footer>\n<p>")
    out.text(site.title)
    if site.address:
        out.text(f" – {site.address}")
    out.raw("</p>\n</footer>\n</body>\n</html>\n")
