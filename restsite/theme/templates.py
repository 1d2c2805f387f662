"""Page templates: the home menu, the about page and the default page."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from restsite.fields.registry import ABOUT_TEMPLATE, DEFAULT_TEMPLATE, HOME_TEMPLATE
from restsite.services.field_service import (
    get_field,
    render_field_raw,
    render_value_raw,
)
from restsite.services.page_service import page_url
from restsite.theme.buffer import HtmlBuffer
from restsite.theme.layout import render_footer, render_header

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from restsite.config import Settings
    from restsite.filesystem.toml_manager import SiteConfig
    from restsite.models.page import PageCache
    from restsite.services.asset_service import AssetResolver
    from restsite.services.field_service import RenderContext

logger = logging.getLogger(__name__)

_MEATS_SECTION = """\
<div class="menu-item grid-8">
<h2>Carnes</h2>
<ul>
<li>
<span><sup>R$</sup>129</span>
<div>
<h3>Picanha Nobre no Alho</h3>
<p>Pequenas tiras de salmão feitas no alho e óleo</p>
</div>
</li>
<li>
<span><sup>R$</sup>89</span>
<div>
<h3>Cupim no Bafo</h3>
<p>Sardinhas escolhidas a dedo e fritas em cerveja premium</p>
</div>
</li>
<li>
<span><sup>R$</sup>159</span>
<div>
<h3>Hamburger Artesanal Rest</h3>
<p>Grandes camarões grelhados, servidos ao molho de camarão com catupiry</p>
</div>
</li>
</ul>
</div>
"""

_ABOUT_COPY = """\
<p>Gostaria de enfatizar que o desenvolvimento contínuo de distintas formas de atuação \
prepara-nos para enfrentar situações atípicas decorrentes do remanejamento dos quadros \
funcionais.</p>
<h2>Visão</h2>
<p>Não obstante, a expansão dos mercados mundiais faz parte de um processo de \
gerenciamento de alternativas às soluções ortodoxas.</p>
<h2>Valores</h2>
<p>O empenho em analisar a consolidação das estruturas apresenta tendências no sentido \
de aprovar a manutenção dos índices pretendidos.</p>
"""

NOT_FOUND_TEXT = "Nenhum post encontrado"


@dataclass
class ThemeEnv:
    """Site-wide collaborators available to every template."""

    site: SiteConfig
    settings: Settings
    assets: AssetResolver


def _title(ctx: RenderContext, page: PageCache) -> None:
    ctx.out.raw('<h2 class="subtitulo">')
    ctx.out.text(page.title)
    ctx.out.raw("</h2>\n")


async def render_home(page: PageCache, ctx: RenderContext, env: ThemeEnv) -> None:
    """Weekly menu: the dish of the day, the stored dishes, then the fixed meats list."""
    currency = html.escape(env.settings.currency_symbol)
    ctx.out.raw('<section class="container">\n')
    _title(ctx, page)

    ctx.out.raw('<div class="menu-item grid-8">\n<h2>')
    await render_field_raw(ctx, "dish-of-day-name")
    ctx.out.raw("</h2>\n<ul>\n")
    dishes = await get_field(ctx, "dishes")
    if isinstance(dishes, list):
        for dish in dishes:
            ctx.out.raw(f"<li>\n<span><sup>{currency}</sup>")
            render_value_raw(ctx, dish.get("price"))
            ctx.out.raw("</span>\n<div>\n<h3>")
            render_value_raw(ctx, dish.get("name"))
            ctx.out.raw("</h3>\n<p>")
            render_value_raw(ctx, dish.get("description"))
            ctx.out.raw("</p>\n</div>\n</li>\n")
    elif dishes is not None:
        logger.warning("Page %d: 'dishes' is not a group value", ctx.page_id)
    ctx.out.raw("</ul>\n</div>\n")

    ctx.out.raw(_MEATS_SECTION)
    ctx.out.raw("</section>\n")


async def render_about(page: PageCache, ctx: RenderContext, env: ThemeEnv) -> None:
    """About page: restaurant photo, history and fixed copy."""
    ctx.out.raw('<section class="container sobre">\n')
    _title(ctx, page)

    ctx.out.raw('<div class="grid-8">\n')
    photo = await get_field(ctx, "photo")
    src = await env.assets.image_src(photo, "medium")
    if src is not None:
        ctx.out.raw(f'<img src="{html.escape(src)}" alt="Fachada do Rest">\n')
    elif photo:
        logger.warning("Page %d: photo asset %s did not resolve, omitting image", page.id, photo)
    ctx.out.raw("</div>\n")

    ctx.out.raw('<div class="grid-8">\n<h2>História</h2>\n<p>')
    await render_field_raw(ctx, "historia")
    ctx.out.raw("</p>\n")
    ctx.out.raw(_ABOUT_COPY)
    ctx.out.raw("</div>\n</section>\n")


async def render_index(page: PageCache, ctx: RenderContext, env: ThemeEnv) -> None:
    """Default template: page title and body."""
    ctx.out.raw('<section class="container sobre">\n')
    _title(ctx, page)
    ctx.out.raw('<div class="grid-8">\n')
    if page.content:
        # page bodies are editor-authored markup
        ctx.out.raw(page.content)
        ctx.out.raw("\n")
    ctx.out.raw("</div>\n</section>\n")


def render_not_found(env: ThemeEnv, current_url: str) -> str:
    """Render the themed document served when no page matches a URL."""
    out = HtmlBuffer()
    render_header(out, env.site, env.settings, current_url=current_url, template="404")
    out.raw('<section class="container sobre">\n<p>')
    out.text(NOT_FOUND_TEXT)
    out.raw("</p>\n</section>\n")
    render_footer(out, env.site)
    return out.getvalue()


THEME_TEMPLATES: dict[str, Callable[[PageCache, RenderContext, ThemeEnv], Awaitable[None]]] = {
    HOME_TEMPLATE: render_home,
    ABOUT_TEMPLATE: render_about,
    DEFAULT_TEMPLATE: render_index,
}


async def render_page(page: PageCache, ctx: RenderContext, env: ThemeEnv) -> str:
    """Render a full HTML document for ``page``.

    ``ctx.page_id`` must be ``page.id``; every field read in the template
    defaults to it.
    """
    template = THEME_TEMPLATES.get(page.template)
    if template is None:
        logger.warning("Unknown template %s for page %s, using default", page.template, page.slug)
        template = render_index

    render_header(
        ctx.out,
        env.site,
        env.settings,
        current_url=page_url(page.slug, env.site),
        template=page.template,
    )
    await template(page, ctx, env)
    render_footer(ctx.out, env.site)
    return ctx.out.getvalue()
