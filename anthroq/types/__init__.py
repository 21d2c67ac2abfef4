"""Type definitions for the proxy."""

from .chat import (
    ContentBlock,
    ConversationTurn,
    DownstreamMessage,
    DownstreamRequest,
    DownstreamTool,
    DownstreamToolCall,
    FunctionCall,
    FunctionDeclaration,
    MessageResponse,
    MessageUsage,
    TextBlock,
    ToolDeclaration,
    ToolResultBlock,
    ToolUseBlock,
)

__all__ = [
    "ContentBlock",
    "ConversationTurn",
    "DownstreamMessage",
    "DownstreamRequest",
    "DownstreamTool",
    "DownstreamToolCall",
    "FunctionCall",
    "FunctionDeclaration",
    "MessageResponse",
    "MessageUsage",
    "TextBlock",
    "ToolDeclaration",
    "ToolResultBlock",
    "ToolUseBlock",
]
