"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_THEME_DIR = Path(__file__).parent / "theme" / "static"


class Settings(BaseSettings):
    """Rest site settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False
    expose_docs: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///data/db/restsite.db"

    # Paths
    content_dir: Path = Path("./content")
    theme_dir: Path = _DEFAULT_THEME_DIR

    # Public URLs
    theme_url: str = "/theme"
    uploads_url: str = "/wp-content/uploads"
    font_url: str = "https://fonts.googleapis.com/css?family=Alegreya+SC"

    # Presentation
    currency_symbol: str = "R$"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    trusted_hosts: list[str] = Field(default_factory=list)

    # Editor access
    admin_token: str = "change-me-in-production"

    def validate_runtime_security(self) -> None:
        """Validate security-critical production settings."""
        if self.debug:
            return

        violations: list[str] = []
        if self.admin_token == "change-me-in-production" or len(self.admin_token) < 32:
            violations.append(
                "ADMIN_TOKEN must be overridden with a high-entropy value (>=32 chars)"
            )
        if not self.trusted_hosts:
            violations.append("TRUSTED_HOSTS must be configured in production")

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Insecure production configuration: {joined}")
