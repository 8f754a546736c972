"""CLI commands that send the trip graph to an LLM."""

from __future__ import annotations

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tripgraph.errors import TripGraphError
from tripgraph.graph.builder import build_knowledge_graph, graph_to_summary
from tripgraph.graph.walk import WalkLimits
from tripgraph.llm.client import LLMClient
from tripgraph.llm.loader import load_prompt
from tripgraph.store import open_store
from tripgraph.summary import build_trip_summary_input, generate_trip_summary

console = Console()

PROVIDERS = ["gemini", "claude"]
THINKING_LEVELS = ["off", "minimal", "low", "medium", "high"]


def _make_llm(config: dict, provider: Optional[str], model: Optional[str], thinking: str) -> LLMClient:
    try:
        return LLMClient(
            provider=provider or config.get("provider", "gemini"),
            model=model or config.get("model"),
            thinking_level=thinking,
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@click.command("summarize")
@click.option("--provider", type=click.Choice(PROVIDERS), default=None)
@click.option("--model", default=None, help="Override model name")
@click.option("--thinking", type=click.Choice(THINKING_LEVELS), default="low")
@click.pass_obj
def summarize(config: dict, provider: Optional[str], model: Optional[str], thinking: str):
    """Generate the trip summary and save it to your settings.

    \b
    Examples:
        tripgraph summarize
        tripgraph --snapshot trip.json summarize --provider claude
    """
    llm = _make_llm(config, provider, model, thinking)
    console.print(f"[dim]Using {llm.provider} / {llm.model}[/dim]")

    try:
        with console.status("[bold green]Summarizing trip..."):
            result = generate_trip_summary(open_store(config), llm, limits=WalkLimits.from_config(config))
    except TripGraphError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(Panel(result.summary, title="[bold green]Trip summary[/bold green]", border_style="green"))
    console.print(f"[dim]Updated {result.updated_at}[/dim]")


@click.command("ask")
@click.argument("question")
@click.option("--provider", type=click.Choice(PROVIDERS), default=None)
@click.option("--model", default=None)
@click.pass_obj
def ask(config: dict, question: str, provider: Optional[str], model: Optional[str]):
    """Ask a natural language question about your trip.

    \b
    Examples:
        tripgraph ask "Who am I meeting on Tuesday?"
        tripgraph ask "What do I still owe Jane?"
    """
    llm = _make_llm(config, provider, model, "low")

    try:
        data = open_store(config).load_trip_data()
    except TripGraphError as exc:
        raise click.ClickException(str(exc)) from exc

    if data.is_empty:
        console.print("[yellow]No contacts, events, todos, or notes yet.[/yellow]")
        return

    graph = build_knowledge_graph(data.contacts, data.events, data.todos, data.notes)
    prompt = load_prompt("ask")
    user_message = prompt.render(
        overview=graph_to_summary(graph),
        details=build_trip_summary_input(data, WalkLimits.from_config(config)),
        question=question,
    )

    try:
        with console.status("[bold green]Thinking..."):
            response = llm.run(prompt.system_prompt, user_message)
    except Exception as exc:
        raise click.ClickException(f"Question failed: {exc}") from exc

    console.print(Panel(response, title="[bold green]tripgraph[/bold green]", border_style="green"))
