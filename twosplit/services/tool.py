"""MCP tool adapter for twosplit.

Declares the tool, validates invocation arguments, delegates to the
orchestrator and wraps the rendered artifact as MCP text content.
"""

import logging
import uuid
from typing import Any, Optional

from mcp.types import TextContent, Tool

from twosplit.lib.logging_config import log_with_context

from .backend import CompletionBackend
from .errors import BackendError, InvalidArgumentError, ToolExecutionError, UnknownToolError
from .models import DEFAULT_MAX_TOKENS, TOOL_NAME, VALID_MODELS, ToolRequest
from .orchestrator import Orchestrator

logger = logging.getLogger(__name__)

TOOL_DESCRIPTION = "Get multiple AI perspectives and combine them into the best response"


def _coerce_text(value: Any) -> str:
    """Coerce an argument to text, treating an absent value as empty."""
    if value is None:
        return ""
    return str(value)


class TwosplitTool:
    """The single tool exposed by the server."""

    name = TOOL_NAME

    def __init__(self, orchestrator: Orchestrator):
        self.orchestrator = orchestrator

    def definition(self) -> Tool:
        """Build the tool descriptor returned on listing requests."""
        return Tool(
            name=self.name,
            description=TOOL_DESCRIPTION,
            inputSchema={
                "type": "object",
                "properties": {
                    "prompt": {
                        "type": "string",
                        "description": "The prompt to send to the AI",
                    },
                    "model": {
                        "type": "string",
                        "description": f"The Claude model to use ({', '.join(VALID_MODELS)})",
                        "enum": list(VALID_MODELS),
                    },
                },
                "required": ["prompt", "model"],
            },
        )

    def list_tools(self) -> list[Tool]:
        return [self.definition()]

    def validate(self, arguments: Optional[dict[str, Any]]) -> ToolRequest:
        """Validate raw invocation arguments.

        Raises:
            InvalidArgumentError: If prompt or model is empty or absent, or the
                model is not one of VALID_MODELS
        """
        arguments = arguments or {}
        prompt = _coerce_text(arguments.get("prompt"))
        model = _coerce_text(arguments.get("model"))

        if not prompt or not model:
            raise InvalidArgumentError("Prompt and model are required")

        if model not in VALID_MODELS:
            raise InvalidArgumentError(f"Invalid model. Must be one of: {', '.join(VALID_MODELS)}")

        return ToolRequest(prompt=prompt, model=model)

    async def call(self, name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        """Handle an invocation request.

        Raises:
            UnknownToolError: If name is not this tool's name
            InvalidArgumentError: If the arguments fail validation
            ToolExecutionError: If any backend call fails
        """
        if name != self.name:
            logger.warning(f"Rejected call to unknown tool: {name}")
            raise UnknownToolError(name)

        request = self.validate(arguments)
        correlation_id = str(uuid.uuid4())
        log_with_context(
            logger, "info", "Tool call received",
            correlation_id=correlation_id, model=request.model, prompt_chars=len(request.prompt),
        )

        try:
            response = await self.orchestrator.synthesize(
                request.prompt, request.model, correlation_id=correlation_id
            )
        except BackendError as e:
            log_with_context(
                logger, "error", f"Tool call failed: {e}", correlation_id=correlation_id
            )
            raise ToolExecutionError(e) from e

        return [TextContent(type="text", text=response.render())]


def create_tool(
    backend: CompletionBackend,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: Optional[float] = None,
) -> TwosplitTool:
    """Create the tool adapter wired to an orchestrator over ``backend``."""
    return TwosplitTool(Orchestrator(backend, max_tokens=max_tokens, timeout=timeout))
