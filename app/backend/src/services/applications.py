"""Read-only access to incubation applications stored in Supabase."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from app.backend.src.core.config import Settings
from app.backend.src.core.errors import internal, not_found
from app.backend.src.schemas.notification import ApplicationRecord

LOGGER = structlog.get_logger(__name__)

APPLICATIONS_TABLE = "applications"


class ApplicationStore:
    """Thin PostgREST client for the ``applications`` table."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationStore":
        """Build a store authenticated with the service role key."""

        if not settings.supabase_url:
            LOGGER.warning("supabase_url_not_configured")
        service_key = settings.supabase_service_role_key or ""
        client = httpx.Client(
            base_url=f"{(settings.supabase_url or '').rstrip('/')}/rest/v1",
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
                "Accept": "application/json",
            },
            timeout=settings.http_timeout_seconds,
        )
        return cls(client)

    def close(self) -> None:
        self._client.close()

    def get_application(self, application_id: str) -> ApplicationRecord:
        """Return the single application whose ``id`` matches.

        Missing rows and client-side query errors are reported as not found.
        Transport failures and datastore 5xx responses are internal errors.
        """

        try:
            response = self._client.get(
                f"/{APPLICATIONS_TABLE}",
                params={"id": f"eq.{application_id}", "select": "*"},
            )
        except httpx.HTTPError as exc:
            LOGGER.error(
                "application_lookup_unavailable",
                application_id=application_id,
                error=str(exc),
            )
            raise internal("Application lookup failed") from exc

        if response.status_code >= 500:
            LOGGER.error(
                "application_lookup_unavailable",
                application_id=application_id,
                status_code=response.status_code,
                body=response.text,
            )
            raise internal("Application lookup failed")

        if response.status_code >= 400:
            LOGGER.error(
                "application_not_found",
                application_id=application_id,
                status_code=response.status_code,
                body=response.text,
            )
            raise not_found()

        rows = _parse_rows(response)
        if len(rows) != 1:
            LOGGER.error(
                "application_not_found",
                application_id=application_id,
                row_count=len(rows),
            )
            raise not_found()

        try:
            return ApplicationRecord.model_validate(rows[0])
        except ValidationError as exc:
            LOGGER.error(
                "application_record_invalid",
                application_id=application_id,
                error=str(exc),
            )
            raise internal("Application record is missing an email address") from exc


def _parse_rows(response: httpx.Response) -> list[dict[str, Any]]:
    payload = response.json()
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        return [row for row in payload if isinstance(row, dict)]
    return []


__all__ = ["APPLICATIONS_TABLE", "ApplicationStore"]
