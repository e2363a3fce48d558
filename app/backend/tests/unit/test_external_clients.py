"""Tests for the Supabase and Resend HTTP clients."""

from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[4]))

import httpx
import pytest

from app.backend.src.core.config import Settings
from app.backend.src.core.errors import NotificationError, NotificationErrorKind
from app.backend.src.schemas.notification import EmailMessage
from app.backend.src.services.applications import ApplicationStore
from app.backend.src.services.email import EmailClient


def _store(handler) -> ApplicationStore:  # type: ignore[no-untyped-def]
    client = httpx.Client(
        base_url="https://project.supabase.co/rest/v1",
        transport=httpx.MockTransport(handler),
    )
    return ApplicationStore(client)


def _email_client(handler) -> EmailClient:  # type: ignore[no-untyped-def]
    client = httpx.Client(
        base_url="https://api.resend.com",
        transport=httpx.MockTransport(handler),
    )
    return EmailClient(client)


def _message() -> EmailMessage:
    return EmailMessage(
        sender="Dreamers Incubation <noreply@resend.dev>",
        to=["founder@example.com"],
        subject="Your Application has been Approved!",
        html="<p>hi</p>",
    )


def test_get_application_queries_single_row() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "id": "app-1",
                    "email": "founder@example.com",
                    "incubation_centre": "Dreamers Hub",
                    "startup_name": "Acme",
                }
            ],
        )

    record = _store(handler).get_application("app-1")

    assert record.email == "founder@example.com"
    assert record.incubation_centre == "Dreamers Hub"
    assert seen[0].url.path == "/rest/v1/applications"
    assert seen[0].url.params["id"] == "eq.app-1"
    assert seen[0].url.params["select"] == "*"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json=[]),
        httpx.Response(200, json=[{"email": "a@example.com"}, {"email": "b@example.com"}]),
        httpx.Response(400, json={"message": "invalid input syntax for type uuid"}),
    ],
)
def test_get_application_reports_not_found(response: httpx.Response) -> None:
    store = _store(lambda request: response)

    with pytest.raises(NotificationError) as exc_info:
        store.get_application("app-1")

    assert exc_info.value.kind is NotificationErrorKind.NOT_FOUND
    assert exc_info.value.message == "Application not found"


def test_get_application_distinguishes_datastore_outage() -> None:
    store = _store(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(NotificationError) as exc_info:
        store.get_application("app-1")

    assert exc_info.value.kind is NotificationErrorKind.INTERNAL


def test_get_application_transport_error_is_internal() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NotificationError) as exc_info:
        _store(handler).get_application("app-1")

    assert exc_info.value.kind is NotificationErrorKind.INTERNAL
    assert exc_info.value.message == "Application lookup failed"


def test_store_from_settings_sends_service_credentials() -> None:
    settings = Settings(
        SUPABASE_URL="https://project.supabase.co/",
        SUPABASE_SERVICE_ROLE_KEY="service-key",
    )

    store = ApplicationStore.from_settings(settings)
    try:
        assert str(store._client.base_url) == "https://project.supabase.co/rest/v1/"
        assert store._client.headers["apikey"] == "service-key"
        assert store._client.headers["authorization"] == "Bearer service-key"
    finally:
        store.close()


def test_send_posts_provider_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "re_123"})

    result = _email_client(handler).send(_message())

    assert result == {"id": "re_123"}
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/emails"
    assert json.loads(seen[0].content) == {
        "from": "Dreamers Incubation <noreply@resend.dev>",
        "to": ["founder@example.com"],
        "subject": "Your Application has been Approved!",
        "html": "<p>hi</p>",
    }


def test_send_keeps_success_when_provider_body_is_not_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="queued")

    result = _email_client(handler).send(_message())

    assert result == {"data": "queued"}
    assert len(seen) == 1


def test_send_returns_empty_dict_for_empty_provider_body() -> None:
    result = _email_client(lambda request: httpx.Response(202)).send(_message())

    assert result == {}


@pytest.mark.parametrize("status_code", [401, 422, 500])
def test_send_failure_is_delivery_failure(status_code: int) -> None:
    client = _email_client(
        lambda request: httpx.Response(status_code, json={"message": "nope"})
    )

    with pytest.raises(NotificationError) as exc_info:
        client.send(_message())

    assert exc_info.value.kind is NotificationErrorKind.DELIVERY_FAILURE
    assert exc_info.value.message == "Failed to send email"


def test_send_transport_error_is_delivery_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NotificationError) as exc_info:
        _email_client(handler).send(_message())

    assert exc_info.value.kind is NotificationErrorKind.DELIVERY_FAILURE


def test_email_client_from_settings_uses_api_key() -> None:
    settings = Settings(RESEND_API_KEY="resend-key")

    client = EmailClient.from_settings(settings)
    try:
        assert client._client.headers["authorization"] == "Bearer resend-key"
        assert client._client.base_url.scheme == "https"
        assert client._client.base_url.host == "api.resend.com"
    finally:
        client.close()
