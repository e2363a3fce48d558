"""Resend transactional email client."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from app.backend.src.core.config import Settings
from app.backend.src.core.errors import delivery_failure
from app.backend.src.schemas.notification import EmailMessage

LOGGER = structlog.get_logger(__name__)


class EmailClient:
    """Send single HTML emails through the Resend REST API."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailClient":
        if not settings.resend_api_key:
            LOGGER.warning("resend_api_key_not_configured")
        client = httpx.Client(
            base_url=settings.resend_api_url.rstrip("/"),
            headers={"Authorization": f"Bearer {settings.resend_api_key or ''}"},
            timeout=settings.http_timeout_seconds,
        )
        return cls(client)

    def close(self) -> None:
        self._client.close()

    def send(self, message: EmailMessage) -> dict[str, Any]:
        """Submit ``message`` and return the provider response body."""

        try:
            response = self._client.post("/emails", json=message.to_payload())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            LOGGER.error(
                "email_send_failed",
                to=message.to,
                status_code=exc.response.status_code,
                body=exc.response.text,
            )
            raise delivery_failure() from exc
        except httpx.HTTPError as exc:
            LOGGER.error("email_send_failed", to=message.to, error=str(exc))
            raise delivery_failure() from exc

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            LOGGER.warning(
                "email_send_unparsed_response",
                to=message.to,
                status_code=response.status_code,
            )
            return {"data": response.text}
        return body if isinstance(body, dict) else {"data": body}


__all__ = ["EmailClient"]
