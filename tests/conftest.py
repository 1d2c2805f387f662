"""Shared test fixtures for the Rest site."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from restsite.config import Settings
from restsite.fields.registry import SchemaRegistry, build_registry
from restsite.main import create_app
from restsite.models.base import Base

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

TEST_ADMIN_TOKEN = "test-admin-token-with-at-least-32-characters"

INDEX_TOML = """\
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
file = "pages/contato.html"

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
"""

MEDIA_TOML = """\
[[media]]
id = 42
file = "2020/x.jpg"
alt = "Fachada"

[media.sizes]
medium = "2020/x-medium.jpg"
thumbnail = "2020/x-150x150.jpg"
"""


@asynccontextmanager
async def create_test_client(settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client with a fully initialized app.

    Manually performs the work of the application lifespan (DB, content
    scaffold, cache rebuild) because ASGITransport does not trigger it.
    """
    from restsite.database import create_engine as create_db_engine
    from restsite.filesystem.content_manager import ContentManager, ensure_content_dir
    from restsite.services.cache_service import rebuild_cache

    app = create_app(settings)
    settings.validate_runtime_security()

    engine, session_factory = create_db_engine(settings)
    app.state.engine = engine
    app.state.session_factory = session_factory

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    ensure_content_dir(settings.content_dir)
    content_manager = ContentManager(content_dir=settings.content_dir)
    app.state.content_manager = content_manager

    async with session_factory() as session:
        await rebuild_cache(session, content_manager, app.state.registry)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    await engine.dispose()


@pytest.fixture
def tmp_content_dir(tmp_path: Path) -> Path:
    """Create a temporary content directory with the restaurant pages."""
    content = tmp_path / "content"
    content.mkdir()
    for name in ("fields", "pages", "uploads"):
        (content / name).mkdir()

    (content / "index.toml").write_text(INDEX_TOML, encoding="utf-8")
    (content / "media.toml").write_text(MEDIA_TOML, encoding="utf-8")
    (content / "pages" / "contato.html").write_text(
        "<p>Ligue para reservar.</p>", encoding="utf-8"
    )
    return content


@pytest.fixture
def test_settings(tmp_content_dir: Path, tmp_path: Path) -> Settings:
    """Create test settings with temporary paths."""
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        debug=True,
        admin_token=TEST_ADMIN_TOKEN,
        database_url=f"sqlite+aiosqlite:///{db_path}",
        content_dir=tmp_content_dir,
    )


@pytest.fixture
def registry() -> SchemaRegistry:
    return build_registry()


@pytest.fixture
async def db_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine with all cache tables."""
    engine = create_async_engine(
        test_settings.database_url,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(
    db_engine: AsyncEngine,
) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session
