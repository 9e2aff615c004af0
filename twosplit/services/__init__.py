"""Twosplit services: backend capability, orchestration and the MCP tool adapter.

Example:
    >>> from twosplit.services import create_backend, create_tool
    >>> tool = create_tool(create_backend(api_key))
    >>> content = await tool.call("twosplit", {"prompt": "Name a prime", "model": "claude-3-5-haiku-latest"})
"""

from .backend import AnthropicBackend, CompletionBackend, create_backend
from .errors import (
    BackendError,
    ConfigurationError,
    InvalidArgumentError,
    MalformedSynthesisError,
    ToolExecutionError,
    TwosplitError,
    UnknownToolError,
    ValidationError,
)
from .models import (
    TOOL_NAME,
    VALID_MODELS,
    Completion,
    CompletionPair,
    OtherBlock,
    SynthesisResult,
    TextBlock,
    ToolRequest,
    ToolResponse,
)
from .orchestrator import Orchestrator
from .parsing import extract_text, parse_synthesis
from .tool import TwosplitTool, create_tool

__all__ = [
    "AnthropicBackend",
    "CompletionBackend",
    "create_backend",
    "BackendError",
    "ConfigurationError",
    "InvalidArgumentError",
    "MalformedSynthesisError",
    "ToolExecutionError",
    "TwosplitError",
    "UnknownToolError",
    "ValidationError",
    "TOOL_NAME",
    "VALID_MODELS",
    "Completion",
    "CompletionPair",
    "OtherBlock",
    "SynthesisResult",
    "TextBlock",
    "ToolRequest",
    "ToolResponse",
    "Orchestrator",
    "extract_text",
    "parse_synthesis",
    "TwosplitTool",
    "create_tool",
]
