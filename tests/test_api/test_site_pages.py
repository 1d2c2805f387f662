"""End-to-end tests for the rendered HTML pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import create_test_client

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from httpx import AsyncClient

    from restsite.config import Settings


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create test HTTP client with the content directory indexed."""
    async with create_test_client(test_settings) as ac:
        yield ac


@pytest.fixture
def menu_fields(tmp_content_dir: Path) -> None:
    (tmp_content_dir / "fields" / "menu.toml").write_text(
        '[fields]\n"dish-of-day-name" = "Moqueca"\n\n'
        '[[fields.dishes]]\nname = "Feijoada"\ndescription = "Completa"\nprice = "45"\n\n'
        '[[fields.dishes]]\nname = "Bobó"\ndescription = "De camarão"\nprice = "52"\n',
        encoding="utf-8",
    )
    (tmp_content_dir / "fields" / "sobre.toml").write_text(
        '[fields]\nphoto = "42"\nhistoria = "Fundado em 1990."\n', encoding="utf-8"
    )


class TestFrontPage:
    @pytest.mark.asyncio
    async def test_front_page_without_dishes(self, client: AsyncClient) -> None:
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        body = resp.text
        assert '<div class="menu-item grid-8">\n<h2></h2>\n<ul>\n</ul>\n</div>' in body
        assert "<h3>Picanha Nobre no Alho</h3>" in body
        assert "<h3>Cupim no Bafo</h3>" in body
        assert "<h3>Hamburger Artesanal Rest</h3>" in body

    @pytest.mark.asyncio
    async def test_front_page_with_dishes(self, menu_fields: None, client: AsyncClient) -> None:
        body = (await client.get("/")).text
        assert "<h2>Moqueca</h2>" in body
        feijoada = body.index("<h3>Feijoada</h3>")
        bobo = body.index("<h3>Bobó</h3>")
        carnes = body.index("<h2>Carnes</h2>")
        assert feijoada < bobo < carnes
        assert "<span><sup>R$</sup>45</span>" in body

    @pytest.mark.asyncio
    async def test_front_page_by_slug(self, client: AsyncClient) -> None:
        resp = await client.get("/menu")
        assert resp.status_code == 200
        assert '<h2 class="subtitulo">Menu da Semana</h2>' in resp.text


class TestAboutPage:
    @pytest.mark.asyncio
    async def test_photo_and_history(self, menu_fields: None, client: AsyncClient) -> None:
        resp = await client.get("/sobre")
        assert resp.status_code == 200
        assert (
            '<img src="/wp-content/uploads/2020/x-medium.jpg" alt="Fachada do Rest">' in resp.text
        )
        assert "<p>Fundado em 1990.</p>" in resp.text
        assert '<li class="current_page_item"><a href="/sobre">Sobre</a></li>' in resp.text


class TestOtherPages:
    @pytest.mark.asyncio
    async def test_default_template(self, client: AsyncClient) -> None:
        resp = await client.get("/contato")
        assert resp.status_code == 200
        assert "<p>Ligue para reservar.</p>" in resp.text

    @pytest.mark.asyncio
    async def test_unknown_page_404(self, client: AsyncClient) -> None:
        resp = await client.get("/cardapio")
        assert resp.status_code == 404
        assert resp.headers["content-type"].startswith("text/html")
        assert "<p>Nenhum post encontrado</p>" in resp.text
        assert '<li><a href="/sobre">Sobre</a></li>' in resp.text

    @pytest.mark.asyncio
    async def test_invalid_slug_404(self, client: AsyncClient) -> None:
        resp = await client.get("/Bad%20Slug")
        assert resp.status_code == 404
        assert "<p>Nenhum post encontrado</p>" in resp.text

    @pytest.mark.asyncio
    async def test_empty_page_renders_title(
        self, tmp_content_dir: Path, test_settings: Settings
    ) -> None:
        (tmp_content_dir / "pages" / "contato.html").unlink()
        async with create_test_client(test_settings) as ac:
            resp = await ac.get("/contato")
        assert resp.status_code == 200
        assert '<h2 class="subtitulo">Contato</h2>\n<div class="grid-8">\n</div>' in resp.text
        assert "Nenhum post encontrado" not in resp.text

    @pytest.mark.asyncio
    async def test_missing_front_page_404(
        self, tmp_content_dir: Path, test_settings: Settings
    ) -> None:
        index = tmp_content_dir / "index.toml"
        index.write_text(
            index.read_text(encoding="utf-8").replace('front_page = "menu"', 'front_page = "x"'),
            encoding="utf-8",
        )
        async with create_test_client(test_settings) as ac:
            resp = await ac.get("/")
        assert resp.status_code == 404
        assert "<p>Nenhum post encontrado</p>" in resp.text

    @pytest.mark.asyncio
    async def test_page_outside_content_dir_does_not_block_startup(
        self, tmp_content_dir: Path, test_settings: Settings
    ) -> None:
        index = tmp_content_dir / "index.toml"
        index.write_text(
            index.read_text(encoding="utf-8")
            + '\n[[pages]]\nid = 11\nslug = "fora"\nfile = "../outside.html"\n',
            encoding="utf-8",
        )
        async with create_test_client(test_settings) as ac:
            assert (await ac.get("/contato")).status_code == 200
            assert (await ac.get("/fora")).status_code == 404

    @pytest.mark.asyncio
    async def test_theme_stylesheet_served(self, client: AsyncClient) -> None:
        resp = await client.get("/theme/style.css")
        assert resp.status_code == 200
        assert "text/css" in resp.headers["content-type"]

    @pytest.mark.asyncio
    async def test_upload_served(self, client: AsyncClient, tmp_content_dir: Path) -> None:
        upload = tmp_content_dir / "uploads" / "2020"
        upload.mkdir(parents=True)
        (upload / "x-medium.jpg").write_bytes(b"\xff\xd8\xff")
        resp = await client.get("/wp-content/uploads/2020/x-medium.jpg")
        assert resp.status_code == 200
        assert resp.content == b"\xff\xd8\xff"

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": "1.0.0", "database": "ok", "pages": 3}
