"""Core module initialization."""

from .credentials import DEFAULT_EXTRACTORS, extract_api_key
from .downstream import DownstreamClient, build_outbound_headers
from . import strict_json
from .exceptions import (
    ArgumentParseError,
    ConfigurationError,
    DownstreamError,
    InternalError,
    MissingCredentialError,
    ProxyError,
)

__all__ = [
    "ArgumentParseError",
    "ConfigurationError",
    "DEFAULT_EXTRACTORS",
    "DownstreamClient",
    "DownstreamError",
    "InternalError",
    "MissingCredentialError",
    "ProxyError",
    "build_outbound_headers",
    "extract_api_key",
    "strict_json",
]
