"""Registry configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Literal, Optional

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class RegistryApiSettings(BaseSettings):
    """Process/runtime settings for the registry API server."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="MCP_REGISTRY_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Bind address for the registry API.")
    port: PositiveInt = Field(default=8320, description="Port for the registry API.")
    reload: bool = Field(default=False, description="Enable uvicorn auto-reload (dev only).")
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = Field(
        default="info",
        description="Log level for registry API / uvicorn.",
    )


class RegistrySettings(BaseSettings):
    """Validated settings for the registry service."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="MCP_REGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy database URL. Defaults to a SQLite file under var/data.",
    )
    auto_migrate: bool = Field(
        default=True,
        description="Apply Alembic migrations when the API starts.",
    )
    storage_root: Optional[Path] = Field(
        default=None,
        description="Filesystem root backing the object storage buckets.",
    )
    storage_bucket: str = Field(
        default="package-files",
        description="Public bucket holding READMEs and changelogs.",
    )
    storage_artifact_bucket: str = Field(
        default="package-artifacts",
        description="Private bucket holding tarballs; served only by the download route.",
    )
    storage_public_url: str = Field(
        default="http://127.0.0.1:8320/storage",
        description="Base URL under which stored objects are publicly reachable.",
    )
    session_secret: str = Field(
        default="dev-session-secret",
        description="Secret shared with the identity provider to verify session tokens.",
    )
    session_algorithm: str = Field(default="HS256", description="JWT algorithm for session tokens.")
    session_cookie_name: str = Field(
        default="registry_session",
        description="Cookie carrying the session credential for browser clients.",
    )
    session_token_ttl_seconds: PositiveInt = Field(
        default=3600,
        description="TTL for session tokens issued by the development identity provider.",
    )
    api_token_prefix: str = Field(
        default="mcpr_",
        description="Prefix marking long-lived API tokens.",
    )
    admin_user_ids: list[str] = Field(
        default_factory=list,
        description="User ids granted the administrative (moderation) role.",
    )
    max_readme_bytes: PositiveInt = Field(default=512_000)
    max_changelog_bytes: PositiveInt = Field(default=512_000)
    max_tarball_bytes: PositiveInt = Field(default=52_428_800)
    default_page_size: PositiveInt = Field(default=20)
    max_page_size: PositiveInt = Field(default=100)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
    )

    def resolved_storage_root(self) -> Path:
        root = self.storage_root or PROJECT_ROOT / "var" / "registry" / "storage"
        return Path(root).expanduser().resolve()

    def is_admin_user(self, user_id: str | None) -> bool:
        return bool(user_id) and user_id in set(self.admin_user_ids)


@lru_cache()
def get_settings() -> RegistrySettings:
    """Return memoized registry settings."""

    return RegistrySettings()


@lru_cache()
def get_api_settings() -> RegistryApiSettings:
    """Return memoized API process settings."""

    return RegistryApiSettings()
