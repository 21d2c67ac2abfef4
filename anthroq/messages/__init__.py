"""Anthropic Messages API translation helpers."""

from .translator import (
    build_message_response,
    convert_messages,
    convert_tool_calls,
    convert_tool_choice,
    convert_tools,
    effective_max_tokens,
    generate_message_id,
    messages_to_chat_completions,
)

__all__ = [
    "build_message_response",
    "convert_messages",
    "convert_tool_calls",
    "convert_tool_choice",
    "convert_tools",
    "effective_max_tokens",
    "generate_message_id",
    "messages_to_chat_completions",
]
