"""Application configuration utilities."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOGIN_BASE_URL = "http://localhost:3000"
DEFAULT_SENDER = "Dreamers Incubation <noreply@resend.dev>"


class Settings(BaseSettings):
    """Settings derived from environment variables."""

    supabase_url: str | None = Field(default=None, alias="SUPABASE_URL")
    supabase_service_role_key: str | None = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    resend_api_url: str = Field(
        default="https://api.resend.com", alias="RESEND_API_URL"
    )
    notification_sender: str = Field(
        default=DEFAULT_SENDER, alias="NOTIFICATION_SENDER"
    )
    app_base_url: str | None = Field(default=None, alias="APP_BASE_URL")
    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def login_base_url(self) -> str:
        """Return the portal address used for login links in emails.

        ``APP_BASE_URL`` wins when set. Otherwise the Supabase URL is reused
        with its first ``/v1`` segment removed, falling back to the local
        development server.
        """

        if self.app_base_url:
            return self.app_base_url.rstrip("/")
        derived = (self.supabase_url or "").replace("/v1", "", 1)
        return derived or DEFAULT_LOGIN_BASE_URL

    @property
    def login_url(self) -> str:
        return f"{self.login_base_url}/login"


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
