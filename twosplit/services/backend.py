"""Language-model backend capability.

The orchestrator only needs ``complete(model, prompt, max_tokens)``. The real
implementation talks to the Anthropic Messages API; tests substitute a fake
with the same shape.
"""

import logging
from typing import Any, Protocol

from anthropic import AsyncAnthropic

from .models import Completion, ContentBlock, OtherBlock, TextBlock

logger = logging.getLogger(__name__)


class CompletionBackend(Protocol):
    """Protocol for a single-turn completion backend.

    Implementations:
    - AnthropicBackend: Uses the Anthropic Messages API
    - FakeBackend: Scripted responses for testing
    """

    async def complete(self, model: str, prompt: str, max_tokens: int) -> Completion:
        """Generate one completion for a single user message.

        Args:
            model: Model identifier
            prompt: User message text
            max_tokens: Maximum output tokens

        Returns:
            Completion with the response content blocks
        """
        ...


def to_content_block(block: Any) -> ContentBlock:
    """Convert an SDK content block into the text/other union."""
    block_type = getattr(block, "type", None)
    if block_type == "text":
        return TextBlock(text=block.text)
    return OtherBlock(type=str(block_type or "unknown"))


class AnthropicBackend:
    """Completion backend backed by ``anthropic.AsyncAnthropic``.

    SDK-level retries are disabled; every failure surfaces immediately.
    """

    def __init__(self, api_key: str, client: AsyncAnthropic | None = None):
        self.client = client or AsyncAnthropic(api_key=api_key, max_retries=0)

    async def complete(self, model: str, prompt: str, max_tokens: int) -> Completion:
        response = await self.client.messages.create(
            model=model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return Completion(
            content=[to_content_block(block) for block in response.content],
            model=getattr(response, "model", None),
            stop_reason=getattr(response, "stop_reason", None),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()


def create_backend(api_key: str) -> AnthropicBackend:
    """Create the Anthropic backend for the given API key."""
    return AnthropicBackend(api_key=api_key)
