"""API routes for the proxy."""

from .health import root
from .messages import messages_endpoint

__all__ = ["messages_endpoint", "root"]
