"""Tests for the twosplit MCP tool adapter."""

import pytest
from mcp.types import TextContent

from twosplit.services.errors import (
    InvalidArgumentError,
    ToolExecutionError,
    UnknownToolError,
    ValidationError,
)
from twosplit.services.models import VALID_MODELS
from twosplit.services.tool import TwosplitTool, create_tool

from .fakes import FakeBackend, Scripted

MODEL = "claude-3-5-sonnet-latest"


# =============================================================================
# Tool listing
# =============================================================================


class TestListTools:
    """Tests for the tool descriptor."""

    @pytest.mark.unit
    def test_single_descriptor(self, tool):
        tools = tool.list_tools()

        assert len(tools) == 1
        assert tools[0].name == "twosplit"
        assert tools[0].description == (
            "Get multiple AI perspectives and combine them into the best response"
        )

    @pytest.mark.unit
    def test_input_schema(self, tool):
        """Both fields are required strings and model is a four-member enum."""
        schema = tool.list_tools()[0].inputSchema

        assert schema["type"] == "object"
        assert schema["required"] == ["prompt", "model"]
        assert schema["properties"]["prompt"]["type"] == "string"
        assert schema["properties"]["model"]["type"] == "string"
        assert schema["properties"]["model"]["enum"] == list(VALID_MODELS)
        assert len(schema["properties"]["model"]["enum"]) == 4


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    """Tests for argument validation. No backend call may happen here."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "arguments",
        [
            {"model": MODEL},
            {"prompt": "", "model": MODEL},
            {"prompt": None, "model": MODEL},
            {"prompt": "hi"},
            {"prompt": "hi", "model": ""},
            {},
            None,
        ],
    )
    async def test_missing_fields(self, tool, backend, arguments):
        with pytest.raises(InvalidArgumentError, match="Prompt and model are required"):
            await tool.call("twosplit", arguments)

        assert backend.calls == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("model", ["gpt-4", "claude-3-opus", "CLAUDE-3-OPUS-LATEST", 42])
    async def test_model_not_allowed(self, tool, backend, model):
        """The error lists every allowed model."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            await tool.call("twosplit", {"prompt": "hi", "model": model})

        message = str(exc_info.value)
        assert message.startswith("Invalid model. Must be one of: ")
        for allowed in VALID_MODELS:
            assert allowed in message
        assert backend.calls == []

    @pytest.mark.unit
    def test_validation_errors_are_value_errors(self, tool):
        with pytest.raises(ValidationError):
            tool.validate({"prompt": "hi", "model": "nope"})
        with pytest.raises(ValueError):
            tool.validate({"prompt": "hi", "model": "nope"})

    @pytest.mark.unit
    def test_prompt_coerced_to_text(self, tool):
        request = tool.validate({"prompt": 12345, "model": MODEL})

        assert request.prompt == "12345"
        assert request.model == MODEL

    @pytest.mark.unit
    def test_prompt_passed_through_unchanged(self, tool):
        request = tool.validate({"prompt": "  keep my spacing \n", "model": MODEL})

        assert request.prompt == "  keep my spacing \n"


# =============================================================================
# Invocation
# =============================================================================


class TestCall:
    """Tests for tool invocation."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_tool(self, tool, backend):
        with pytest.raises(UnknownToolError, match="Unknown tool"):
            await tool.call("threesplit", {"prompt": "hi", "model": MODEL})

        assert backend.calls == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success_returns_single_text_block(self, tool):
        content = await tool.call("twosplit", {"prompt": "What is DNS?", "model": MODEL})

        assert len(content) == 1
        assert isinstance(content[0], TextContent)
        assert content[0].type == "text"
        assert content[0].text == (
            "MERGED ANSWER\n"
            "\n"
            "=== AI 1 Output ===\n"
            "First answer\n"
            "\n"
            "=== AI 2 Output ===\n"
            "Second answer\n"
            "\n"
            "=== Source Attribution ===\n"
            "SOURCES:\nIntro from Response 1, example from Response 2"
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_uses_requested_model(self, tool, backend):
        await tool.call("twosplit", {"prompt": "hi", "model": "claude-3-haiku-20240307"})

        assert {model for model, _, _ in backend.calls} == {"claude-3-haiku-20240307"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_whitespace_prompt_is_accepted(self, tool, backend):
        """A prompt of only whitespace is non-empty text and runs the full flow."""
        content = await tool.call("twosplit", {"prompt": "   ", "model": "claude-3-5-haiku-latest"})

        assert len(backend.calls) == 3
        assert backend.calls[0][1].startswith("   \n\n")
        assert content[0].text.startswith("MERGED ANSWER")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_backend_error_is_prefixed(self):
        """Backend failures are marked as API errors and keep their message."""
        backend = FakeBackend([Scripted(error=RuntimeError("overloaded_error")), "two"])
        tool = create_tool(backend)

        with pytest.raises(ToolExecutionError) as exc_info:
            await tool.call("twosplit", {"prompt": "hi", "model": MODEL})

        assert str(exc_info.value) == "Anthropic API error: overloaded_error"
        assert len(backend.calls) == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_malformed_synthesis_still_succeeds(self):
        backend = FakeBackend(["one", "two", "no delimiter at all"])
        tool = create_tool(backend)

        content = await tool.call("twosplit", {"prompt": "hi", "model": MODEL})

        assert content[0].text.startswith("no delimiter at all\n\n=== AI 1 Output ===\none")
        assert content[0].text.endswith("=== Source Attribution ===\n")

    @pytest.mark.unit
    def test_create_tool_wires_orchestrator(self):
        backend = FakeBackend()

        tool = create_tool(backend, max_tokens=512, timeout=30.0)

        assert isinstance(tool, TwosplitTool)
        assert tool.orchestrator.backend is backend
        assert tool.orchestrator.max_tokens == 512
        assert tool.orchestrator.timeout == 30.0
