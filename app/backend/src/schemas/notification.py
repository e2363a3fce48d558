"""Schemas for the application status notification endpoint."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DecisionStatus = Literal["approved", "rejected"]


class NotificationRequest(BaseModel):
    """Inbound payload naming the application and the decision outcome."""

    application_id: str = Field(alias="applicationId")
    status: DecisionStatus

    model_config = ConfigDict(extra="ignore")

    @field_validator("application_id")
    @classmethod
    def _strip_application_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("applicationId must be a non-empty string")
        return normalized


class ApplicationRecord(BaseModel):
    """Columns of an ``applications`` row consumed by the notifier."""

    id: Any = None
    email: str
    incubation_centre: str | None = None

    model_config = ConfigDict(extra="ignore")


class EmailMessage(BaseModel):
    """Outbound email handed to the provider."""

    sender: str = Field(alias="from")
    to: list[str]
    subject: str
    html: str

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the provider JSON body."""

        return self.model_dump(by_alias=True)


class NotificationResult(BaseModel):
    """Success body returned after the provider accepted the email."""

    success: Literal[True] = True
    message: str
    email_response: dict[str, Any] = Field(alias="emailResponse")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str


__all__ = [
    "ApplicationRecord",
    "DecisionStatus",
    "EmailMessage",
    "ErrorResponse",
    "NotificationRequest",
    "NotificationResult",
]
