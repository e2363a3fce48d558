"""Public API routers exposed by the FastAPI application."""

from . import health, notifications

__all__ = [
    "health",
    "notifications",
]
