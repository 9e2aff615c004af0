"""Data models for a single twosplit invocation.

Everything here is created and consumed within one tool call.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

TOOL_NAME = "twosplit"

VALID_MODELS: tuple[str, ...] = (
    "claude-3-opus-latest",
    "claude-3-5-sonnet-latest",
    "claude-3-5-haiku-latest",
    "claude-3-haiku-20240307",
)

DEFAULT_MAX_TOKENS = 1024


class TextBlock(BaseModel):
    """A content block carrying text."""

    type: Literal["text"] = "text"
    text: str


class OtherBlock(BaseModel):
    """Any non-text content block (tool use, thinking, ...). Never extracted."""

    type: str


ContentBlock = Union[TextBlock, OtherBlock]


class Completion(BaseModel):
    """One response from the language-model backend."""

    content: list[ContentBlock] = Field(default_factory=list)
    model: Optional[str] = None
    stop_reason: Optional[str] = None


class ToolRequest(BaseModel):
    """Validated arguments of a twosplit invocation."""

    prompt: str = Field(min_length=1)
    model: str


class CompletionPair(BaseModel):
    """Texts of the two independent completions, kept by call position."""

    first: str
    second: str


class SynthesisResult(BaseModel):
    """Parsed output of the synthesis call."""

    raw: str
    answer: str
    sources: str = ""
    well_formed: bool = True


class ToolResponse(BaseModel):
    """Everything returned to the caller, before rendering."""

    answer: str
    first: str
    second: str
    sources: str = ""

    @classmethod
    def from_parts(cls, pair: CompletionPair, synthesis: SynthesisResult) -> "ToolResponse":
        return cls(
            answer=synthesis.answer,
            first=pair.first,
            second=pair.second,
            sources=synthesis.sources,
        )

    def render(self) -> str:
        """Render the fixed-layout text artifact."""
        return (
            f"{self.answer}\n"
            f"\n"
            f"=== AI 1 Output ===\n"
            f"{self.first}\n"
            f"\n"
            f"=== AI 2 Output ===\n"
            f"{self.second}\n"
            f"\n"
            f"=== Source Attribution ===\n"
            f"{self.sources}"
        )
