"""API module for the proxy."""

from .routes import messages_endpoint, root

__all__ = ["messages_endpoint", "root"]
