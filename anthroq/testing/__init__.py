"""Testing utilities for in-process proxy simulations."""

from .assertions import assert_anthropic_message_valid, assert_cors_headers
from .builders import build_anthropic_request, build_chat_completion, build_tool_call
from .fake_downstream import DownstreamResponse, FakeDownstream

__all__ = [
    "DownstreamResponse",
    "FakeDownstream",
    "assert_anthropic_message_valid",
    "assert_cors_headers",
    "build_anthropic_request",
    "build_chat_completion",
    "build_tool_call",
]
