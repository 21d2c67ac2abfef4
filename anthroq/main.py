"""Main FastAPI application for the anthroq proxy.

Importing this module loads configuration and builds the app, for use as
``uvicorn anthroq.main:app``.
"""

from fastapi import FastAPI

from .app import create_app
from .config_loader import load_settings
from .logging import setup_logging


def _build_default_app() -> FastAPI:
    settings = load_settings()
    setup_logging(settings.log_level)
    return create_app(settings)


app = _build_default_app()

__all__ = ["app", "create_app"]
