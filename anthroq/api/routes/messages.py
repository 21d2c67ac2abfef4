"""Anthropic-compatible Messages API endpoint."""

import logging

from fastapi import Request, Response
from starlette.requests import ClientDisconnect

logger = logging.getLogger("anthroq")


async def messages_endpoint(request: Request) -> Response:
    """POST /v1/messages - translate and forward to the downstream API."""
    client_host = request.client.host if request.client else "unknown"
    try:
        body = await request.body()
    except ClientDisconnect:
        logger.warning(f"ClientDisconnect while reading body from {client_host}")
        return Response(status_code=499)  # Client Closed Request

    orchestrator = request.app.state.orchestrator
    return await orchestrator.handle(request.headers, body)
