"""tripgraph CLI — knowledge graph and trip summaries over your trip data."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from tripgraph.cli.graph_cmd import graph_cli
from tripgraph.cli.serve_cmd import serve
from tripgraph.cli.summary_cmd import ask, summarize
from tripgraph.config import load_config, store_api_key

console = Console()


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Config file (default: ~/.tripgraph/config.json)")
@click.option("--snapshot", default=None, type=click.Path(dir_okay=False),
              help="Read trip data from this JSON snapshot instead of the backend")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path: Optional[str], snapshot: Optional[str], verbose: bool):
    """tripgraph — contacts, events, todos and notes as a knowledge graph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    config = load_config(Path(config_path) if config_path else None)
    if snapshot:
        config["api_url"] = ""
        config["snapshot_path"] = snapshot
    ctx.obj = config


@cli.command("set-key")
@click.argument("provider", type=click.Choice(["gemini", "claude"]))
@click.option("--key", prompt=True, hide_input=True, help="API key")
def set_key(provider, key):
    """Store an LLM API key in macOS Keychain.

    Examples:

        tripgraph set-key gemini

        tripgraph set-key claude
    """
    if store_api_key(provider, key):
        console.print(f"[green]✓[/green] {provider} API key stored in Keychain")
    else:
        console.print("[red]Failed to store key[/red]")


cli.add_command(graph_cli)
cli.add_command(summarize)
cli.add_command(ask)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
