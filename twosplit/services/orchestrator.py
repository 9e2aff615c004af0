"""Completion orchestrator: two independent completions, then one synthesis.

Flow per invocation:
    1. Append the single-answer instruction to the prompt
    2. Run two completions with that prompt concurrently
    3. Ask the backend to merge or select between them
    4. Parse the merged answer and its attribution note

Exactly three backend calls are made on success. If either of the first two
fails, the other is cancelled and no synthesis call is made.
"""

import asyncio
import logging
import time
from typing import Optional

from opentelemetry import trace

from twosplit.lib.logging_config import log_with_context

from .backend import CompletionBackend
from .errors import BackendError
from .models import DEFAULT_MAX_TOKENS, Completion, CompletionPair, ToolResponse
from .parsing import extract_text, parse_synthesis
from .prompts import build_enhanced_prompt, build_synthesis_prompt

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class Orchestrator:
    """Runs the fan-out/fan-in completion flow against a backend."""

    def __init__(
        self,
        backend: CompletionBackend,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: Optional[float] = None,
    ):
        """Initialize the orchestrator.

        Args:
            backend: Completion backend used for all three calls
            max_tokens: Output limit for every call
            timeout: Optional per-call timeout in seconds
        """
        self.backend = backend
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def synthesize(
        self, prompt: str, model: str, correlation_id: Optional[str] = None
    ) -> ToolResponse:
        """Produce the merged answer for a prompt.

        Args:
            prompt: Original user prompt
            model: Model identifier for all three calls
            correlation_id: Optional ID attached to every log line

        Returns:
            ToolResponse with the answer, both completions and sources

        Raises:
            BackendError: If any backend call fails
        """
        with tracer.start_as_current_span("twosplit.synthesize") as span:
            span.set_attribute("twosplit.model", model)
            started = time.perf_counter()

            pair = await self.complete_pair(build_enhanced_prompt(prompt), model, correlation_id)

            synthesis_prompt = build_synthesis_prompt(prompt, pair.first, pair.second)
            final = await self._complete(model, synthesis_prompt, "synthesis", correlation_id)
            synthesis = parse_synthesis(extract_text(final.content))
            span.set_attribute("twosplit.synthesis_well_formed", synthesis.well_formed)

            log_with_context(
                logger,
                "info",
                "Synthesis complete",
                correlation_id=correlation_id,
                model=model,
                well_formed=synthesis.well_formed,
                duration_ms=round((time.perf_counter() - started) * 1000),
            )
            return ToolResponse.from_parts(pair, synthesis)

    async def complete_pair(
        self, prompt: str, model: str, correlation_id: Optional[str] = None
    ) -> CompletionPair:
        """Run two independent completions concurrently.

        Results are kept by call position. On the first failure the other
        call is cancelled and awaited before the error propagates.
        """
        tasks = [
            asyncio.create_task(self._complete(model, prompt, call, correlation_id))
            for call in ("first", "second")
        ]
        try:
            first, second = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return CompletionPair(first=extract_text(first.content), second=extract_text(second.content))

    async def _complete(
        self, model: str, prompt: str, call: str, correlation_id: Optional[str]
    ) -> Completion:
        """Make one backend call, translating any failure into BackendError."""
        started = time.perf_counter()
        log_with_context(
            logger, "debug", f"Backend call '{call}' started",
            correlation_id=correlation_id, call=call, model=model,
        )

        with tracer.start_as_current_span(f"twosplit.backend.{call}"):
            try:
                completion = await self._call_backend(model, prompt)
            except BackendError as e:
                log_with_context(
                    logger, "warning", f"Backend call '{call}' failed: {e}",
                    correlation_id=correlation_id, call=call,
                )
                raise
            except Exception as e:
                log_with_context(
                    logger, "warning", f"Backend call '{call}' failed: {e}",
                    correlation_id=correlation_id, call=call, error_type=type(e).__name__,
                )
                raise BackendError(str(e) or type(e).__name__, cause=e) from e

        log_with_context(
            logger, "debug", f"Backend call '{call}' finished",
            correlation_id=correlation_id,
            call=call,
            stop_reason=completion.stop_reason,
            duration_ms=round((time.perf_counter() - started) * 1000),
        )
        return completion

    async def _call_backend(self, model: str, prompt: str) -> Completion:
        request = self.backend.complete(model, prompt, self.max_tokens)
        if not self.timeout:
            return await request

        try:
            return await asyncio.wait_for(request, self.timeout)
        except asyncio.TimeoutError as e:
            raise BackendError(f"Request timed out after {self.timeout}s", cause=e) from e
