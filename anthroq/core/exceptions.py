"""Core exceptions for the proxy.

Every failure in a request is raised as a ``ProxyError`` subclass and
rendered exactly once into an HTTP response. Nothing is retried.
"""

import traceback
from typing import Any, Mapping, Optional


class ProxyError(Exception):
    """Base exception for proxy errors."""

    status_code: int = 500
    kind: str = "proxy_error"
    title: str = "Proxy error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self, include_diagnostics: bool = True) -> dict[str, Any]:
        """Render the JSON body returned to the caller."""
        return {"error": self.title, "kind": self.kind, "message": self.message}


class ConfigurationError(ProxyError):
    """Raised when there's an issue with the configuration."""
    pass


class MissingCredentialError(ProxyError):
    """No API key was found in any of the supported headers."""

    status_code = 401
    kind = "missing_credential"
    title = "Missing API key"

    def __init__(self, headers: Optional[Mapping[str, str]] = None) -> None:
        super().__init__(
            "Please provide Groq API key in Authorization, x-api-key, "
            "or anthropic-api-key header"
        )
        self.headers = dict(headers or {})

    def to_payload(self, include_diagnostics: bool = True) -> dict[str, Any]:
        payload = super().to_payload(include_diagnostics)
        if include_diagnostics:
            payload["debug"] = {"headers": self.headers}
        return payload


class DownstreamError(ProxyError):
    """The downstream completion endpoint answered with a non-2xx status."""

    kind = "downstream_error"
    title = "Groq API request failed"

    def __init__(self, status_code: int, details: str) -> None:
        super().__init__(f"downstream returned status {status_code}")
        self.status_code = status_code
        self.details = details

    def to_payload(self, include_diagnostics: bool = True) -> dict[str, Any]:
        return {
            "error": self.title,
            "kind": self.kind,
            "details": self.details,
            "status": self.status_code,
        }


class InternalError(ProxyError):
    """Catch-all for parsing and shape failures while handling a request."""

    kind = "internal_error"
    title = "Internal server error"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause

    @classmethod
    def wrap(cls, exc: BaseException) -> "InternalError":
        """Wrap an unexpected exception, keeping it as the cause."""
        message = str(exc) or exc.__class__.__name__
        return cls(message, cause=exc)

    @property
    def stack(self) -> str:
        source = self.cause if self.cause is not None else self
        return "".join(
            traceback.format_exception(type(source), source, source.__traceback__)
        )

    def to_payload(self, include_diagnostics: bool = True) -> dict[str, Any]:
        payload = super().to_payload(include_diagnostics)
        if include_diagnostics:
            payload["stack"] = self.stack
        return payload


class ArgumentParseError(InternalError):
    """A downstream tool call carried arguments that are not valid JSON.

    Reported with status 500 like any internal error, but with its own kind
    so it can be told apart in logs and responses.
    """

    kind = "argument_parse_error"

    def __init__(
        self,
        call_id: str,
        arguments: Any,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            f"Invalid JSON arguments for tool call {call_id!r}: {cause}",
            cause=cause,
        )
        self.call_id = call_id
        self.arguments = arguments
