"""Prompt templates for the twosplit fan-out and synthesis calls."""

SINGLE_ANSWER_INSTRUCTION = (
    "Provide exactly one response. Do not provide multiple options or ask follow-up questions."
)

SYNTHESIS_TEMPLATE = """You are tasked with creating the best possible response by either selecting one response entirely or combining elements from both responses. Here are two responses to this prompt: "{prompt}"

Response 1:
{first}

Response 2:
{second}

Your task:
1. Create the best possible response by either:
   - Using one response entirely if it's clearly superior
   - OR combining the best elements from both responses
2. Then list which parts came from which response

Important: {instruction}

Format your response exactly like this:
[Your complete response with no explanations or commentary]
---
SOURCES:
[List which parts came from Response 1 vs Response 2]"""


def build_enhanced_prompt(prompt: str) -> str:
    """Append the fixed single-answer instruction to the user prompt."""
    return f"{prompt}\n\n{SINGLE_ANSWER_INSTRUCTION}"


def build_synthesis_prompt(prompt: str, first: str, second: str) -> str:
    """Embed the original prompt and both completions in the synthesis template."""
    return SYNTHESIS_TEMPLATE.format(
        prompt=prompt,
        first=first,
        second=second,
        instruction=SINGLE_ANSWER_INSTRUCTION,
    )
