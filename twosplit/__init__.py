"""twosplit: MCP server that merges two independent LLM completions into one answer."""

__version__ = "0.1.0"
