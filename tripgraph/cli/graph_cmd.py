"""CLI commands for the trip knowledge graph.

Commands:
  graph show     — Print the graph (table, or JSON with --json)
  graph stats    — One-screen overview of the graph
  graph walk     — Show the bounded walk the summarizer sees
  graph input    — Print the assembled summarizer input
"""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from tripgraph.errors import TripGraphError
from tripgraph.graph.builder import KnowledgeGraph, build_knowledge_graph, graph_to_summary
from tripgraph.graph.entities import TripData
from tripgraph.graph.walk import WalkLimits, walk_graph_by_contact
from tripgraph.store import open_store
from tripgraph.summary import build_trip_summary_input

console = Console()


def _load(config: dict) -> tuple[TripData, KnowledgeGraph]:
    try:
        data = open_store(config).load_trip_data()
    except TripGraphError as exc:
        raise click.ClickException(str(exc)) from exc
    graph = build_knowledge_graph(data.contacts, data.events, data.todos, data.notes)
    return data, graph


@click.group("graph")
def graph_cli():
    """Knowledge graph operations — inspect the graph and its walk."""
    pass


@graph_cli.command("show")
@click.option("--json", "json_mode", is_flag=True, help="Print {nodes, edges} as JSON")
@click.pass_obj
def show(config: dict, json_mode: bool):
    """Show every node and edge.

    \b
    Examples:
        tripgraph graph show
        tripgraph --snapshot trip.json graph show --json
    """
    _, graph = _load(config)

    if json_mode:
        click.echo(json.dumps(graph.to_dict(), indent=2, ensure_ascii=False))
        return

    nodes = Table(title=f"Nodes ({len(graph.nodes)})")
    nodes.add_column("Type", style="cyan")
    nodes.add_column("ID", style="dim")
    nodes.add_column("Label")
    for n in graph.nodes:
        nodes.add_row(n.type, n.id, n.label)
    console.print(nodes)

    edges = Table(title=f"Edges ({len(graph.edges)})")
    edges.add_column("From")
    edges.add_column("Type", style="cyan")
    edges.add_column("To")
    for e in graph.edges:
        src = graph.node(e.from_id)
        dst = graph.node(e.to_id)
        edges.add_row(src.label if src else e.from_id, e.type, dst.label if dst else e.to_id)
    console.print(edges)


@graph_cli.command("stats")
@click.pass_obj
def stats(config: dict):
    """Show a short overview: contacts, events, open todos and link counts."""
    _, graph = _load(config)
    console.print(graph_to_summary(graph))


@graph_cli.command("walk")
@click.option("--max-contacts", default=None, type=int, help="Override the contact cap")
@click.option("--max-steps", default=None, type=int, help="Override the step cap")
@click.pass_obj
def walk(config: dict, max_contacts, max_steps):
    """Show the by-contact walk, step by step."""
    _, graph = _load(config)
    limits = WalkLimits.from_config(config)
    limits = WalkLimits(
        max_contacts=max_contacts if max_contacts is not None else limits.max_contacts,
        max_steps=max_steps if max_steps is not None else limits.max_steps,
    )
    result = walk_graph_by_contact(graph, limits)

    table = Table(title=f"Walk ({len(result.steps)} steps)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Node")
    table.add_column("Context")
    table.add_column("Contact", style="dim")
    for i, step in enumerate(result.steps, start=1):
        node = graph.node(step.node_id)
        table.add_row(
            str(i), step.node_type, node.label if node else step.node_id,
            step.edge_context, step.contact_id or "",
        )
    console.print(table)

    if result.truncated:
        console.print(
            f"[yellow]Truncated:[/yellow] {result.contacts_dropped} contact(s) and "
            f"{result.nodes_dropped} other node(s) left out"
        )


@graph_cli.command("input")
@click.pass_obj
def summary_input(config: dict):
    """Print the text the summarizer would receive."""
    data, _ = _load(config)
    click.echo(build_trip_summary_input(data, WalkLimits.from_config(config)))
