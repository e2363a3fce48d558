"""Entrypoint for the FastAPI application."""

import os
from dotenv import load_dotenv

# Load .env locally only (the hosting platform injects env vars)
env_path = os.path.join(os.path.dirname(__file__), "../.env")
if os.path.exists(env_path):
    load_dotenv(dotenv_path=os.path.abspath(env_path))

from fastapi import FastAPI

from .api import health, notifications
from .core.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Dreamers Incubation Notifications", version="0.1.0")

    app.include_router(health.router)
    app.include_router(notifications.router)

    return app


app = create_app()
