"""Single-request orchestration for the Messages endpoint."""

import json
import logging
import time
import uuid
from typing import Any, Mapping, Optional

import httpx
from fastapi.responses import JSONResponse

from ..config_loader import ProxySettings
from ..messages import build_message_response, messages_to_chat_completions
from .credentials import extract_api_key
from . import strict_json
from .downstream import DownstreamClient
from .exceptions import InternalError, MissingCredentialError, ProxyError

logger = logging.getLogger("anthroq")


class MessagesOrchestrator:
    """Turns one Anthropic Messages request into one downstream call.

    Holds only immutable settings and the downstream client; all request
    data lives in local variables of ``handle``.
    """

    def __init__(
        self,
        settings: ProxySettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.client = DownstreamClient(
            settings.downstream_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def handle(self, headers: Mapping[str, str], body: bytes) -> JSONResponse:
        """Handle one request and always return a response, never raise."""
        req_id = uuid.uuid4().hex[:8]
        start_time = time.perf_counter()

        try:
            payload = await self._process(req_id, headers, body)
            response = JSONResponse(payload)
        except ProxyError as exc:
            return self._error_response(req_id, exc)
        except Exception as exc:
            return self._error_response(req_id, InternalError.wrap(exc))

        elapsed = time.perf_counter() - start_time
        logger.info(
            f"[{req_id}] Completed response, stop_reason={payload['stop_reason']}, "
            f"took {elapsed:.3f}s"
        )
        return response

    async def _process(
        self, req_id: str, headers: Mapping[str, str], body: bytes
    ) -> dict[str, Any]:
        if logger.isEnabledFor(logging.DEBUG):
            headers_str = ", ".join(f"{k}: {v}" for k, v in headers.items())
            logger.debug(f"[{req_id}] Headers received: {headers_str}")

        api_key = extract_api_key(headers)

        request_data = strict_json.loads(body or b"{}")
        logger.info(f"[{req_id}] Anthropic -> {self.settings.provider} | Model: {request_data.get('model')}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"[{req_id}] Request data: {json.dumps(request_data, ensure_ascii=False, indent=2)}")

        downstream_request = messages_to_chat_completions(
            request_data,
            model=self.settings.downstream_model,
            max_output_tokens=self.settings.max_output_tokens,
            default_temperature=self.settings.default_temperature,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"[{req_id}] Downstream request: "
                f"{json.dumps(downstream_request, ensure_ascii=False, indent=2)}"
            )

        completion = await self.client.create_completion(downstream_request, api_key)

        response = build_message_response(completion, self.settings.response_model)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"[{req_id}] Anthropic response: {json.dumps(response, ensure_ascii=False, indent=2)}")
        return dict(response)

    def _error_response(self, req_id: str, exc: ProxyError) -> JSONResponse:
        if isinstance(exc, MissingCredentialError):
            logger.warning(f"[{req_id}] Missing API key")
        elif isinstance(exc, InternalError):
            logger.error(
                f"[{req_id}] Error processing request ({exc.kind}): {exc.message}",
                exc_info=exc.cause or exc,
            )
        else:
            logger.error(f"[{req_id}] {exc.title} ({exc.kind}): {exc.message}")

        return JSONResponse(
            exc.to_payload(self.settings.expose_diagnostics),
            status_code=exc.status_code,
        )
