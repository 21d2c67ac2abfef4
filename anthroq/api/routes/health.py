"""Liveness endpoint."""

from fastapi.responses import JSONResponse

ALIVE_MESSAGE = "Groq Anthropic Tool Proxy is alive 💡"


async def root() -> JSONResponse:
    """GET / - static liveness payload."""
    return JSONResponse({"message": ALIVE_MESSAGE})
