"""FastAPI application factory for the anthroq proxy."""

import logging
from typing import Awaitable, Callable, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import Response

from .api.routes import messages_endpoint, root
from .config_loader import ProxySettings, load_settings
from .core.orchestrator import MessagesOrchestrator

logger = logging.getLogger("anthroq")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, x-api-key, anthropic-version",
}


def create_app(
    settings: Optional[ProxySettings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Proxy settings. Loaded from the config file when omitted.
        transport: Optional httpx transport for the downstream call, used by
            tests to route requests to an in-process fake.

    Returns:
        The configured FastAPI application instance.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(title="anthroq Proxy")
    app.state.settings = settings
    app.state.orchestrator = MessagesOrchestrator(settings, transport=transport)

    @app.middleware("http")
    async def cors_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Answer preflight requests and add permissive CORS headers to every response."""
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.on_event("startup")
    async def startup_event():
        logger.info("anthroq proxy starting up...")
        logger.info(
            f"Forwarding to {settings.downstream_url} as model {settings.downstream_model} "
            f"(max_tokens ceiling {settings.max_output_tokens})"
        )
        if settings.expose_diagnostics:
            logger.info("Diagnostic error payloads are enabled")

    app.get("/")(root)
    app.post("/v1/messages")(messages_endpoint)

    return app


__all__ = ["CORS_HEADERS", "create_app"]
