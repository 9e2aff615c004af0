"""Text extraction and synthesis parsing.

The synthesis call is asked to answer in this layout::

    <answer>
    ---
    SOURCES:
    <attribution>

Model output is not guaranteed to follow it, so the parser treats the text
as untrusted. When the delimiter is missing, the whole trimmed text becomes
the answer and the sources note is empty.
"""

import logging
import re
from typing import Iterable

from .errors import MalformedSynthesisError
from .models import ContentBlock, SynthesisResult, TextBlock

logger = logging.getLogger(__name__)

SYNTHESIS_DELIMITER = "---"


def extract_text(blocks: Iterable[ContentBlock]) -> str:
    """Concatenate the text of every text block, in order, without separators."""
    return "".join(block.text for block in blocks if isinstance(block, TextBlock))


def parse_synthesis(
    text: str,
    delimiter: str = SYNTHESIS_DELIMITER,
    strict: bool = False,
) -> SynthesisResult:
    """Split synthesis output into answer and sources on the first delimiter.

    A line holding only the delimiter is preferred, so dashes inside the
    answer (``A---B``) do not cut it short. Without such a line the first
    occurrence of the delimiter anywhere in the text is used.

    Args:
        text: Extracted text of the synthesis completion
        delimiter: Separator between answer and sources
        strict: Raise instead of falling back when the delimiter is missing

    Returns:
        SynthesisResult with trimmed answer and sources

    Raises:
        MalformedSynthesisError: If strict and the delimiter is missing
    """
    line = re.search(rf"^[ \t]*{re.escape(delimiter)}[ \t]*$", text, re.MULTILINE)
    if line:
        answer, found, sources = text[: line.start()], line.group(), text[line.end() :]
    else:
        answer, found, sources = text.partition(delimiter)

    if not found:
        if strict:
            raise MalformedSynthesisError(text, delimiter)
        logger.warning(
            f"Synthesis response has no '{delimiter}' delimiter, "
            f"using whole text as answer ({len(text)} chars)"
        )
        return SynthesisResult(raw=text, answer=text.strip(), sources="", well_formed=False)

    return SynthesisResult(raw=text, answer=answer.strip(), sources=sources.strip())
