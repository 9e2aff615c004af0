#!/usr/bin/env python
"""MCP server exposing the twosplit tool over stdio.

Usage:
    uv run python -m twosplit.mcp.server

Tools provided:
    - twosplit: Get two independent answers and merge them into the best one

Requires ANTHROPIC_API_KEY in the environment (or a .env at the git root).
"""

import asyncio
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from twosplit import __version__
from twosplit.lib.config_manager import ServerConfig, load_server_config
from twosplit.lib.logging_config import setup_logging
from twosplit.services.backend import create_backend
from twosplit.services.errors import ConfigurationError
from twosplit.services.models import TOOL_NAME
from twosplit.services.tool import TwosplitTool, create_tool

logger = logging.getLogger(__name__)

SERVICE_NAME = "twosplit"


def create_server(tool: TwosplitTool) -> Server:
    """Create the MCP server with listing and invocation handlers bound to ``tool``."""
    server = Server(TOOL_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return tool.list_tools()

    # The adapter validates arguments itself so its error messages reach the caller.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Handle tool calls."""
        return await tool.call(name, arguments)

    return server


async def run_server(server_config: ServerConfig) -> None:
    """Serve MCP requests on stdio until the client disconnects."""
    backend = create_backend(server_config.api_key)
    tool = create_tool(
        backend,
        max_tokens=server_config.max_tokens,
        timeout=server_config.backend_timeout,
    )
    server = create_server(tool)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Twosplit MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await backend.close()


def main() -> int:
    """Validate configuration, then run the server.

    Returns:
        Process exit code
    """
    try:
        server_config = load_server_config()
    except ConfigurationError as e:
        setup_logging(SERVICE_NAME)
        logger.error(f"Server error: {e}")
        return 1

    setup_logging(SERVICE_NAME, server_config.log_level, server_config.log_format)

    tracing = server_config.otlp_endpoint is not None
    if tracing:
        from twosplit.lib.telemetry import setup_tracing

        setup_tracing(SERVICE_NAME, server_config.otlp_endpoint, server_config.environment)

    try:
        asyncio.run(run_server(server_config))
    except KeyboardInterrupt:
        logger.info("Twosplit MCP server stopped")
    finally:
        if tracing:
            from twosplit.lib.telemetry import shutdown_tracing

            shutdown_tracing()

    return 0


if __name__ == "__main__":
    sys.exit(main())
