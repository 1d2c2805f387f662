"""Tests for TOML configuration parsing and page field files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from restsite.filesystem.toml_manager import (
    parse_media_config,
    parse_page_fields,
    parse_site_config,
    write_page_fields,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestSiteConfig:
    def test_parse_full_config(self, tmp_content_dir: Path) -> None:
        cfg = parse_site_config(tmp_content_dir)
        assert cfg.title == "Rest"
        assert cfg.phone == "2422-9201"
        assert cfg.front_page == "menu"
        assert [(p.id, p.slug, p.template) for p in cfg.pages] == [
            (5, "menu", "home"),
            (7, "sobre", "about"),
            (9, "contato", "index"),
        ]
        assert cfg.pages[2].file == "pages/contato.html"
        menu = cfg.menus["header-menu"]
        assert menu.label == "Menu Header"
        assert [i.title for i in menu.items] == ["Menu", "Sobre", "Contato"]
        assert menu.items[1].page == "sobre"
        assert [(s.handle, s.src, s.version, s.media) for s in cfg.styles] == [
            ("rest-style", "style.css", "1.0.0", "all")
        ]

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        cfg = parse_site_config(tmp_path)
        assert cfg.title == "Rest"
        assert cfg.pages == []

    def test_corrupted_toml_returns_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "index.toml").write_text("this is not valid [toml\n!@#$%")
        cfg = parse_site_config(tmp_path)
        assert cfg.title == "Rest"
        assert cfg.pages == []

    def test_page_missing_id_returns_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "index.toml").write_text(
            '[site]\ntitle = "Blog"\n\n[[pages]]\nslug = "x"\n'
        )
        cfg = parse_site_config(tmp_path)
        assert cfg.title == "Rest"
        assert cfg.pages == []

    def test_page_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "index.toml").write_text('[[pages]]\nid = 3\nslug = "nossa-casa"\n')
        page = parse_site_config(tmp_path).pages[0]
        assert page.title == "Nossa Casa"
        assert page.template == "index"
        assert page.file is None

    def test_non_table_menu_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "index.toml").write_text(
            '[menus]\nfooter = "x"\n\n[menus.header-menu]\nlabel = "Header"\n'
            'items = [{ title = "Menu", page = "menu" }, "solto"]\n'
        )
        cfg = parse_site_config(tmp_path)
        assert list(cfg.menus) == ["header-menu"]
        assert [i.title for i in cfg.menus["header-menu"].items] == ["Menu"]


class TestMediaConfig:
    def test_parse_media(self, tmp_content_dir: Path) -> None:
        media = parse_media_config(tmp_content_dir)
        assert set(media) == {42}
        assert media[42].file == "2020/x.jpg"
        assert media[42].sizes["medium"] == "2020/x-medium.jpg"

    def test_entries_without_id_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "media.toml").write_text(
            '[[media]]\nfile = "a.jpg"\n\n[[media]]\nid = 1\nfile = "b.jpg"\n'
        )
        assert list(parse_media_config(tmp_path)) == [1]


class TestPageFields:
    def test_write_then_parse(self, tmp_path: Path) -> None:
        path = tmp_path / "fields" / "menu.toml"
        values = {
            "dish-of-day-name": "Moqueca",
            "dishes": [
                {"name": "Feijoada", "price": "45"},
                {"name": "Bobó", "description": "De camarão", "price": "52"},
            ],
        }
        write_page_fields(path, values)
        assert parse_page_fields(path) == values

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert parse_page_fields(tmp_path / "nope.toml") == {}
