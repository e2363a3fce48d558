"""Render and dispatch application decision emails."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Protocol

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import ValidationError

from app.backend.src.core.config import Settings
from app.backend.src.core.errors import bad_request
from app.backend.src.schemas.notification import (
    ApplicationRecord,
    DecisionStatus,
    EmailMessage,
    NotificationRequest,
    NotificationResult,
)

LOGGER = structlog.get_logger(__name__)

BRAND_NAME = "Dreamers Incubation"
TEMPLATE_NAME = "status_notification.html"

_TEMPLATES_DIR = Path(__file__).parent / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


@dataclass(frozen=True)
class StatusContent:
    """Copy and styling that vary with the decision outcome."""

    headline: str
    accent_color: str
    icon: str
    cta_label: str
    approved: bool


STATUS_CONTENT: dict[str, StatusContent] = {
    "approved": StatusContent(
        headline="Approved",
        accent_color="#10B981",
        icon="🎉",
        cta_label="Access Your Dashboard →",
        approved=True,
    ),
    "rejected": StatusContent(
        headline="Rejected",
        accent_color="#EF4444",
        icon="😔",
        cta_label="Log In to View Status →",
        approved=False,
    ),
}


class ApplicationLookup(Protocol):
    def get_application(self, application_id: str) -> ApplicationRecord: ...


class EmailSender(Protocol):
    def send(self, message: EmailMessage) -> dict[str, Any]: ...


def parse_request(payload: Any) -> NotificationRequest:
    """Validate a decoded JSON body into a :class:`NotificationRequest`."""

    if not isinstance(payload, Mapping):
        raise bad_request("Request body must be a JSON object")
    try:
        return NotificationRequest.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise bad_request(f"Invalid {field}: {first.get('msg', 'invalid value')}") from exc


def status_content(status: DecisionStatus) -> StatusContent:
    return STATUS_CONTENT[status]


def render_status_email(
    status: DecisionStatus, incubation_centre: str | None, login_url: str
) -> str:
    """Return the HTML body for a decision email.

    Values sourced from the datastore are escaped by the template environment.
    """

    template = _ENV.get_template(TEMPLATE_NAME)
    return template.render(
        content=status_content(status),
        incubation_centre=incubation_centre or "",
        login_url=login_url,
        brand=BRAND_NAME,
    )


def build_email_message(
    request: NotificationRequest, application: ApplicationRecord, settings: Settings
) -> EmailMessage:
    content = status_content(request.status)
    return EmailMessage(
        sender=settings.notification_sender,
        to=[application.email],
        subject=f"Your Application has been {content.headline}!",
        html=render_status_email(
            request.status, application.incubation_centre, settings.login_url
        ),
    )


class StatusNotifier:
    """Look up an application and email the applicant about the decision.

    Every call sends a new email; repeated requests are not de-duplicated.
    """

    def __init__(
        self,
        applications: ApplicationLookup,
        email_sender: EmailSender,
        settings: Settings,
    ) -> None:
        self._applications = applications
        self._email_sender = email_sender
        self._settings = settings

    def notify(self, request: NotificationRequest) -> NotificationResult:
        application = self._applications.get_application(request.application_id)
        message = build_email_message(request, application, self._settings)
        email_response = self._email_sender.send(message)

        LOGGER.info(
            "status_notification_sent",
            application_id=request.application_id,
            status=request.status,
            to=application.email,
        )
        headline = status_content(request.status).headline
        return NotificationResult(
            message=f"{headline} notification sent to {application.email}",
            email_response=email_response,
        )


__all__ = [
    "BRAND_NAME",
    "STATUS_CONTENT",
    "StatusContent",
    "StatusNotifier",
    "build_email_message",
    "parse_request",
    "render_status_email",
    "status_content",
]
