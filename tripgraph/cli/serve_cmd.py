"""CLI command for serving the graph and trip summary over HTTP."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from tripgraph.api.server import GRAPH_PATH, SUMMARY_PATH, create_server
from tripgraph.graph.walk import WalkLimits
from tripgraph.llm.client import LLMClient
from tripgraph.store import open_store

console = Console()
logger = logging.getLogger(__name__)


@click.command("serve")
@click.option("--host", default="127.0.0.1", help="Interface to bind")
@click.option("--port", default=8787, type=int, help="Port to listen on")
@click.pass_obj
def serve(config: dict, host: str, port: int):
    """Serve the knowledge graph and trip summary endpoints."""

    def llm_factory() -> LLMClient:
        return LLMClient(provider=config.get("provider", "gemini"), model=config.get("model"))

    server = create_server(
        host, port,
        store_factory=lambda: open_store(config),
        llm_factory=llm_factory,
        limits=WalkLimits.from_config(config),
    )
    console.print(f"[bold]Serving on http://{host}:{port}[/bold]")
    console.print(f"  GET  {GRAPH_PATH}")
    console.print(f"  POST {SUMMARY_PATH}")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down[/dim]")
    finally:
        server.server_close()
