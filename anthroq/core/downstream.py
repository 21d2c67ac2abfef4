"""Client for the downstream chat completion endpoint."""

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from . import strict_json
from .exceptions import DownstreamError, InternalError

logger = logging.getLogger("anthroq")


def build_outbound_headers(api_key: str) -> dict[str, str]:
    """Build headers for the downstream request."""
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        # Explicitly request uncompressed responses
        "Accept-Encoding": "identity",
    }


def format_httpx_error(exc: httpx.HTTPError, url: str, timeout: Optional[float]) -> str:
    """Produce a detailed, user-facing description of an httpx error."""
    parts = [exc.__class__.__name__]
    message = str(exc).strip()
    if message:
        parts.append(message)
    parts.append(f"url={url}")
    if isinstance(exc, httpx.TimeoutException):
        parts.append(f"timeout={timeout}s")
    return "; ".join(parts)


class DownstreamClient:
    """Performs the single chat completion call for a request.

    A fresh ``httpx.AsyncClient`` is opened per call so nothing is shared
    between concurrent requests. ``transport`` replaces the network layer,
    which is how tests route calls to an in-process fake.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def create_completion(
        self, payload: Mapping[str, Any], api_key: str
    ) -> dict[str, Any]:
        """POST ``payload`` and return the decoded completion.

        Raises:
            DownstreamError: If the endpoint answers with a non-2xx status.
            InternalError: On transport failures or a non-JSON success body.
        """
        body = json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
        logger.debug(f"Executing request to {self.url} with timeout {self.timeout}s")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.post(
                    self.url, headers=build_outbound_headers(api_key), content=body
                )
        except httpx.HTTPError as exc:
            raise InternalError(format_httpx_error(exc, self.url, self.timeout), cause=exc) from exc

        logger.debug(f"Received response from {self.url}: status {resp.status_code}")

        if not resp.is_success:
            logger.error(f"Groq API error (status {resp.status_code}): {resp.text}")
            raise DownstreamError(resp.status_code, resp.text)

        try:
            return strict_json.loads(resp.content)
        except ValueError as exc:
            raise InternalError(f"Downstream returned invalid JSON: {exc}", cause=exc) from exc
