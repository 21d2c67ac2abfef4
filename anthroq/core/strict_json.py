"""JSON decoding that rejects the non-standard NaN and Infinity literals."""

import json
from typing import Any, Union


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads(data: Union[str, bytes, bytearray]) -> Any:
    """Like ``json.loads`` but raises ``ValueError`` on NaN/Infinity."""
    return json.loads(data, parse_constant=_reject_constant)
