"""Types for the two chat shapes the proxy translates between.

Types are separated into:
- Anthropic types: the block-based Messages format accepted from callers
- Downstream types: the OpenAI-style chat completion format sent to Groq
"""

from typing import Any, Literal, Union

from typing_extensions import NotRequired, TypedDict


# =============================================================================
# Anthropic Types
# =============================================================================
# Inbound requests and outbound responses (v1/messages).


class TextBlock(TypedDict):
    """Plain text content block."""
    type: Literal["text"]
    text: str


class ToolUseBlock(TypedDict):
    """A tool invocation made by the assistant.

    Attributes:
        id: Tool call identifier. Always present on responses, optional
            on inbound history.
        name: Name of the invoked tool.
        input: Structured arguments for the tool.
    """
    type: Literal["tool_use"]
    id: NotRequired[str]
    name: str
    input: Any


class ToolResultBlock(TypedDict):
    """The result of a tool invocation, sent back by the caller.

    Attributes:
        tool_use_id: Id of the tool_use block this result answers.
        content: Result payload, a string or arbitrary structured data.
    """
    type: Literal["tool_result"]
    tool_use_id: str
    content: Any


ContentBlock = Union[TextBlock, ToolUseBlock, ToolResultBlock]


class ConversationTurn(TypedDict):
    """One turn of an inbound conversation."""
    role: Literal["user", "assistant"]
    content: Union[str, list[ContentBlock]]


class ToolDeclaration(TypedDict):
    """A tool declared by the caller.

    Attributes:
        name: Tool name.
        description: Optional human readable description.
        input_schema: JSON schema describing the tool input.
    """
    name: str
    description: NotRequired[str]
    input_schema: dict[str, Any]


class MessageUsage(TypedDict):
    input_tokens: int
    output_tokens: int


class MessageResponse(TypedDict):
    """Anthropic-shaped response returned to the caller."""
    id: str
    model: str
    role: Literal["assistant"]
    type: Literal["message"]
    content: list[ContentBlock]
    stop_reason: Literal["end_turn", "tool_use"]
    stop_sequence: None
    usage: MessageUsage


# =============================================================================
# Downstream Types
# =============================================================================
# OpenAI-compatible chat completion format used by Groq.


class DownstreamMessage(TypedDict):
    """Flattened message: exactly one string per turn."""
    role: str
    content: str


class FunctionDeclaration(TypedDict):
    name: str
    description: str
    parameters: Any


class DownstreamTool(TypedDict):
    type: Literal["function"]
    function: FunctionDeclaration


class FunctionCall(TypedDict):
    """A function call within a tool call.

    Attributes:
        name: Name of the function to call.
        arguments: JSON string containing the function arguments.
    """
    name: str
    arguments: str


class DownstreamToolCall(TypedDict):
    id: str
    type: NotRequired[str]
    function: FunctionCall


class DownstreamRequest(TypedDict):
    """Body of the single outbound chat completion call."""
    model: str
    messages: list[DownstreamMessage]
    temperature: float
    max_tokens: int
    tools: NotRequired[list[DownstreamTool]]
    tool_choice: NotRequired[Any]
