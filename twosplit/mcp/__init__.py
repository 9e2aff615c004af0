"""MCP server entry point for the twosplit tool."""
