"""Downstream API key extraction from inbound request headers."""

import logging
from typing import Callable, Mapping, Optional, Sequence

from .exceptions import MissingCredentialError

logger = logging.getLogger("anthroq")

CredentialExtractor = Callable[[Mapping[str, str]], Optional[str]]

_BEARER_PREFIX = "bearer "


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # Starlette headers are case-insensitive already; plain dicts are not.
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


def from_authorization(headers: Mapping[str, str]) -> Optional[str]:
    """``Authorization: Bearer <token>``, or the raw value when unprefixed."""
    value = _header(headers, "authorization")
    if not value:
        return None
    if value[: len(_BEARER_PREFIX)].lower() == _BEARER_PREFIX:
        return value[len(_BEARER_PREFIX):] or None
    return value


def from_x_api_key(headers: Mapping[str, str]) -> Optional[str]:
    return _header(headers, "x-api-key") or None


def from_anthropic_api_key(headers: Mapping[str, str]) -> Optional[str]:
    return _header(headers, "anthropic-api-key") or None


DEFAULT_EXTRACTORS: tuple[CredentialExtractor, ...] = (
    from_authorization,
    from_x_api_key,
    from_anthropic_api_key,
)


def extract_api_key(
    headers: Mapping[str, str],
    extractors: Sequence[CredentialExtractor] = DEFAULT_EXTRACTORS,
) -> str:
    """Return the first token produced by ``extractors``, tried in order.

    Raises:
        MissingCredentialError: If no extractor finds a token.
    """
    for extractor in extractors:
        token = extractor(headers)
        if token:
            logger.debug(f"Extracted API key: {token[:10]}...")
            return token
    raise MissingCredentialError(dict(headers.items()))
