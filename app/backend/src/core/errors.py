"""Error kinds surfaced by the status notification endpoint."""

from __future__ import annotations

from enum import Enum

from fastapi import status


class NotificationErrorKind(str, Enum):
    """Closed set of failures the endpoint distinguishes."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    DELIVERY_FAILURE = "delivery_failure"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES: dict[NotificationErrorKind, int] = {
    NotificationErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    NotificationErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    NotificationErrorKind.DELIVERY_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    NotificationErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class NotificationError(Exception):
    """Raised by the notification services with a caller-safe message."""

    def __init__(self, kind: NotificationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code


def bad_request(message: str) -> NotificationError:
    return NotificationError(NotificationErrorKind.BAD_REQUEST, message)


def not_found(message: str = "Application not found") -> NotificationError:
    return NotificationError(NotificationErrorKind.NOT_FOUND, message)


def delivery_failure(message: str = "Failed to send email") -> NotificationError:
    return NotificationError(NotificationErrorKind.DELIVERY_FAILURE, message)


def internal(message: str) -> NotificationError:
    return NotificationError(NotificationErrorKind.INTERNAL, message)


__all__ = [
    "NotificationError",
    "NotificationErrorKind",
    "bad_request",
    "delivery_failure",
    "internal",
    "not_found",
]
