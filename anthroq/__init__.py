"""anthroq - Anthropic Messages API to Groq translating proxy

Accepts Anthropic-shaped ``/v1/messages`` requests, forwards them to an
OpenAI-compatible chat completion endpoint (Groq by default) and translates
the completion back into an Anthropic message.

Example:
    >>> from anthroq.app import create_app
    >>> import uvicorn
    >>> uvicorn.run(create_app(), host="0.0.0.0", port=8000)
"""

from .config_loader import ProxySettings, load_config, load_settings
from .logging import setup_logging
from .messages import (
    build_message_response,
    convert_messages,
    convert_tool_calls,
    convert_tools,
    messages_to_chat_completions,
)

__all__ = [
    "ProxySettings",
    "build_message_response",
    "convert_messages",
    "convert_tool_calls",
    "convert_tools",
    "load_config",
    "load_settings",
    "messages_to_chat_completions",
    "setup_logging",
]
