"""Routes for the application status notification function."""

from __future__ import annotations

import json
from collections.abc import Iterator

import structlog
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.backend.src.core.config import Settings, get_settings
from app.backend.src.core.errors import NotificationError, bad_request
from app.backend.src.schemas.notification import ErrorResponse, NotificationResult
from app.backend.src.services.applications import ApplicationStore
from app.backend.src.services.email import EmailClient
from app.backend.src.services.status_notification import StatusNotifier, parse_request

LOGGER = structlog.get_logger(__name__)

router = APIRouter(tags=["notifications"])

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_application_store(
    settings: Settings = Depends(get_settings),
) -> Iterator[ApplicationStore]:
    store = ApplicationStore.from_settings(settings)
    try:
        yield store
    finally:
        store.close()


def get_email_client(settings: Settings = Depends(get_settings)) -> Iterator[EmailClient]:
    client = EmailClient.from_settings(settings)
    try:
        yield client
    finally:
        client.close()


def get_status_notifier(
    store: ApplicationStore = Depends(get_application_store),
    email_client: EmailClient = Depends(get_email_client),
    settings: Settings = Depends(get_settings),
) -> StatusNotifier:
    """Assemble the notifier from its external collaborators."""

    return StatusNotifier(store, email_client, settings)


def _json_response(content: dict[str, object], status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


@router.options("/send-status-notification")
def preflight() -> Response:
    """Answer the browser pre-flight handshake without touching any backend."""

    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(
    "/send-status-notification",
    response_model=NotificationResult,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def send_status_notification(
    request: Request,
    notifier: StatusNotifier = Depends(get_status_notifier),
) -> JSONResponse:
    """Email an applicant that their application was approved or rejected."""

    try:
        raw_body = await request.body()
        try:
            payload = json.loads(raw_body or b"null")
        except ValueError as exc:
            raise bad_request("Request body must be valid JSON") from exc

        notification_request = parse_request(payload)
        result = await run_in_threadpool(notifier.notify, notification_request)
    except NotificationError as exc:
        LOGGER.warning(
            "status_notification_failed",
            kind=exc.kind.value,
            status_code=exc.status_code,
            error=exc.message,
        )
        return _json_response({"error": exc.message}, exc.status_code)
    except Exception as exc:  # noqa: BLE001 - top-level error boundary
        LOGGER.exception("send_status_notification_error", error=str(exc))
        return _json_response(
            {"error": str(exc)}, status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return _json_response(result.model_dump(by_alias=True), status.HTTP_200_OK)
