"""Anthropic Messages <-> Groq chat completion translation.

The downstream model only sees plain role/content pairs, so typed content
blocks are flattened into text with synthetic markers instead of being
mapped onto native tool messages.

Key mappings:
- Anthropic content blocks -> one newline-joined string per turn
- Anthropic tools -> OpenAI-style function declarations
- Anthropic tool_choice -> OpenAI tool_choice
- OpenAI tool_calls -> Anthropic tool_use blocks
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Callable, Mapping, Optional, Sequence

from ..core import strict_json
from ..core.exceptions import ArgumentParseError
from ..types import (
    ConversationTurn,
    DownstreamMessage,
    DownstreamRequest,
    DownstreamTool,
    DownstreamToolCall,
    MessageResponse,
    ToolDeclaration,
    ToolUseBlock,
)

logger = logging.getLogger("anthroq")


def _dump_json(value: Any) -> str:
    """Compact JSON, matching what JavaScript clients produce."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _text_fragment(block: Mapping[str, Any]) -> str:
    return block.get("text") or ""


def _tool_use_fragment(block: Mapping[str, Any]) -> str:
    return f"[Tool Use: {block.get('name', '')}] {_dump_json(block.get('input'))}"


def _tool_result_fragment(block: Mapping[str, Any]) -> str:
    content = block.get("content")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Tool result for %s: %s",
            block.get("tool_use_id"),
            json.dumps(content, ensure_ascii=False, indent=2),
        )
    return f"<tool_result>{_dump_json(content)}</tool_result>"


_BLOCK_HANDLERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "text": _text_fragment,
    "tool_use": _tool_use_fragment,
    "tool_result": _tool_result_fragment,
}


def _flatten_blocks(blocks: Sequence[Any]) -> str:
    parts: list[str] = []
    for block in blocks:
        if not isinstance(block, Mapping):
            logger.debug(f"Dropping non-object content block: {type(block).__name__}")
            continue
        block_type = block.get("type", "")
        handler = _BLOCK_HANDLERS.get(block_type)
        if handler is None:
            logger.debug(f"Dropping unsupported content block type: {block_type!r}")
            continue
        parts.append(handler(block))
    return "\n".join(parts)


def convert_messages(messages: Sequence[ConversationTurn]) -> list[DownstreamMessage]:
    """Flatten Anthropic conversation turns into plain role/content pairs.

    String content passes through unchanged. Block content becomes one
    fragment per block joined by newlines, in the original order:
    text verbatim, ``[Tool Use: <name>] <json>`` for tool_use and
    ``<tool_result><json></tool_result>`` for tool_result. Blocks of any
    other type are dropped.

    Raises:
        TypeError: If a turn's content is neither a string nor a list.
    """
    converted: list[DownstreamMessage] = []
    for msg in messages:
        role = msg["role"]
        content = msg.get("content")

        if isinstance(content, str):
            converted.append({"role": role, "content": content})
            continue

        if not isinstance(content, list):
            raise TypeError(
                f"message content must be a string or a list of content blocks, "
                f"got {type(content).__name__}"
            )

        converted.append({"role": role, "content": _flatten_blocks(content)})
    return converted


def convert_tools(tools: Sequence[ToolDeclaration]) -> list[DownstreamTool]:
    """Convert Anthropic tools to OpenAI format.

    Anthropic: {"name": "...", "description": "...", "input_schema": {...}}
    OpenAI: {"type": "function", "function": {"name": "...", "description": "...", "parameters": {...}}}
    """
    return [
        {
            "type": "function",
            "function": {
                "name": tool["name"],
                "description": tool.get("description") or "",
                "parameters": tool.get("input_schema"),
            },
        }
        for tool in tools
    ]


def convert_tool_choice(tool_choice: Any) -> Any:
    """Convert Anthropic tool_choice to OpenAI format.

    Anthropic: "auto" | "any" | "none" | {"type": "tool", "name": "..."}
    OpenAI: "auto" | "required" | "none" | {"type": "function", "function": {"name": "..."}}

    A missing preference means "auto". Values already in OpenAI form pass
    through untouched.
    """
    if tool_choice is None:
        return "auto"

    if isinstance(tool_choice, str):
        return "required" if tool_choice == "any" else tool_choice

    if not isinstance(tool_choice, Mapping):
        return tool_choice

    choice_type = tool_choice.get("type", "")
    if choice_type == "tool":
        return {"type": "function", "function": {"name": tool_choice.get("name", "")}}
    if choice_type == "any":
        return "required"
    if choice_type in ("auto", "none"):
        return choice_type
    return tool_choice


def convert_tool_calls(tool_calls: Sequence[DownstreamToolCall]) -> list[ToolUseBlock]:
    """Convert OpenAI tool calls into Anthropic tool_use blocks.

    All-or-nothing: if any call carries arguments that are not valid JSON
    the whole batch is rejected.

    Raises:
        ArgumentParseError: If a call's arguments cannot be parsed.
    """
    blocks: list[ToolUseBlock] = []
    for call in tool_calls:
        function = call["function"]
        arguments = function.get("arguments")
        try:
            tool_input = strict_json.loads(arguments)
        except (TypeError, ValueError) as exc:
            raise ArgumentParseError(call.get("id", ""), arguments, cause=exc) from exc

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Tool call: %s(%s)",
                function.get("name"),
                json.dumps(tool_input, ensure_ascii=False, indent=2),
            )

        blocks.append({
            "type": "tool_use",
            "id": call["id"],
            "name": function["name"],
            "input": tool_input,
        })
    return blocks


def effective_max_tokens(requested: Optional[int], ceiling: int) -> int:
    """Cap the caller's token budget at the downstream ceiling."""
    if requested is None:
        return ceiling
    if requested > ceiling:
        logger.warning(f"Capping max_tokens from {requested} to {ceiling}")
    return min(requested, ceiling)


def messages_to_chat_completions(
    payload: Mapping[str, Any],
    *,
    model: str,
    max_output_tokens: int,
    default_temperature: float,
) -> DownstreamRequest:
    """Translate an Anthropic Messages request into a chat completion request.

    Args:
        payload: Anthropic Messages API request body
        model: Downstream model id, replacing whatever the caller asked for
        max_output_tokens: Hard ceiling for max_tokens
        default_temperature: Used when the caller gives no temperature

    Returns:
        Chat completion request body
    """
    temperature = payload.get("temperature")
    result: DownstreamRequest = {
        "model": model,
        "messages": convert_messages(payload["messages"]),
        "temperature": default_temperature if temperature is None else temperature,
        "max_tokens": effective_max_tokens(payload.get("max_tokens"), max_output_tokens),
    }

    tools = payload.get("tools")
    if tools:
        result["tools"] = convert_tools(tools)
        result["tool_choice"] = convert_tool_choice(payload.get("tool_choice"))

    return result


def generate_message_id() -> str:
    return f"msg_{uuid.uuid4().hex[:24]}"


def build_message_response(
    completion: Mapping[str, Any],
    model: str,
    message_id: Optional[str] = None,
) -> MessageResponse:
    """Translate a chat completion into an Anthropic message response.

    Only the first choice is used. Function calls become tool_use blocks
    with stop_reason "tool_use"; otherwise the text content becomes a single
    text block with stop_reason "end_turn".

    Raises:
        KeyError, IndexError: If the completion is missing choices or usage.
        ArgumentParseError: If a tool call's arguments are not valid JSON.
    """
    message = completion["choices"][0]["message"]
    tool_calls = message.get("tool_calls")

    if tool_calls:
        content: list[Any] = list(convert_tool_calls(tool_calls))
        stop_reason = "tool_use"
    else:
        content = [{"type": "text", "text": message.get("content") or ""}]
        stop_reason = "end_turn"

    usage = completion["usage"]
    return {
        "id": message_id or generate_message_id(),
        "model": model,
        "role": "assistant",
        "type": "message",
        "content": content,
        "stop_reason": stop_reason,
        "stop_sequence": None,
        "usage": {
            "input_tokens": usage["prompt_tokens"],
            "output_tokens": usage["completion_tokens"],
        },
    }
