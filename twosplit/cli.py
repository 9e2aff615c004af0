"""Command-line interface for twosplit."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from twosplit.lib.config_manager import config, load_server_config
from twosplit.lib.defaults import DEFAULTS, get_category
from twosplit.lib.logging_config import setup_logging
from twosplit.services.backend import create_backend
from twosplit.services.errors import ConfigurationError, TwosplitError
from twosplit.services.models import TOOL_NAME, VALID_MODELS
from twosplit.services.tool import create_tool

app = typer.Typer(help="Merge two independent Claude answers into the best one")
console = Console()
err_console = Console(stderr=True)


@app.command()
def serve():
    """Run the MCP server on stdio."""
    from twosplit.mcp.server import main

    raise typer.Exit(main())


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send to both completions"),
    model: str = typer.Option(
        "claude-3-5-sonnet-latest", "--model", "-m", help="Claude model to use"
    ),
):
    """Run one twosplit invocation and print the merged answer."""
    try:
        server_config = load_server_config()
    except ConfigurationError as e:
        err_console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(1)

    setup_logging("twosplit", server_config.log_level, server_config.log_format)

    try:
        with console.status("[bold yellow]Collecting two answers and merging..."):
            content = asyncio.run(_ask(server_config, prompt, model))
    except TwosplitError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    for block in content:
        console.print(block.text, markup=False, highlight=False)


async def _ask(server_config, prompt: str, model: str):
    """Async implementation of ask."""
    backend = create_backend(server_config.api_key)
    try:
        tool = create_tool(
            backend,
            max_tokens=server_config.max_tokens,
            timeout=server_config.backend_timeout,
        )
        return await tool.call(TOOL_NAME, {"prompt": prompt, "model": model})
    finally:
        await backend.close()


@app.command()
def models():
    """List the models the tool accepts."""
    table = Table(title="Allowed models")
    table.add_column("Model", style="cyan")
    for model_id in VALID_MODELS:
        table.add_row(model_id)
    console.print(table)


@app.command(name="config")
def show_config():
    """Show resolved configuration with secrets masked."""
    table = Table(title="twosplit configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Category")
    table.add_column("Value")
    for key in DEFAULTS:
        value = config.get(key)
        table.add_row(key, get_category(key) or "", config.mask_value(key, value))
    console.print(table)


if __name__ == "__main__":
    app()
