from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices
from functools import lru_cache
from typing import Literal, Optional

class Settings(BaseSettings):
    # API
    app_name: str = Field(
        default="useradmin",
        validation_alias=AliasChoices("APP_NAME"),
    )
    environment: str = Field(default="local", validation_alias=AliasChoices("DEPLOYMENT_ENV"))
    api_prefix: str = Field(default="/api/v1", validation_alias=AliasChoices("API_PREFIX"))
    enable_cors: bool = Field(default=True, validation_alias=AliasChoices("ENABLE_CORS"))
    api_host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("API_HOST"))
    api_port: int = Field(default=8000, validation_alias=AliasChoices("API_PORT"))

    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))

    database_url: Optional[str] = Field(
        default="sqlite+aiosqlite:///./useradmin.db",
        validation_alias=AliasChoices("DATABASE_URL"),
        description="Async SQLAlchemy URL of the user store behind the reference API.",
    )

    # ------------------------------------------------------------------
    # Admin screen (client side)
    # ------------------------------------------------------------------
    user_api_base_url: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("USER_API_BASE_URL"),
        description="Base URL of the remote user API consumed by the admin screen.",
    )
    user_api_timeout: float = Field(
        default=10.0,
        validation_alias=AliasChoices("USER_API_TIMEOUT"),
        description="Seconds before an HTTP call to the user API is reported as a network failure.",
    )
    users_page_size: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("USERS_PAGE_SIZE"),
        description="Number of users requested by every list read.",
    )
    edit_error_policy: Literal["ignore", "record"] = Field(
        default="ignore",
        validation_alias=AliasChoices("EDIT_ERROR_POLICY"),
        description="Whether a failed edit is surfaced as the page error ('record') or absorbed ('ignore').",
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def user_api_url(self) -> str:
        """Base URL joined with the API prefix, without trailing slash."""
        return self.user_api_base_url.rstrip("/") + "/" + self.api_prefix.strip("/")

    @property
    def database_url_sync(self):
        """Sync driver URL (used by Alembic)."""
        url = (self.database_url or "").strip()
        url = url.replace("+aiosqlite", "").replace("+asyncpg", "")
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url

    @property
    def database_url_async(self):
        """Async driver URL (used by SQLAlchemy async engine)."""
        url = (self.database_url or "").strip()
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

@lru_cache
def get_settings():
    return Settings()
