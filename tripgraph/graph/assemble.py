"""Assemble the summarizer input from a graph walk.

The walk's steps are grouped by contact (in the order the walk met them),
peeked, and stitched into one markdown-ish section per contact, followed
by an "Other" section for everything not tied to a walked contact.
"""

from __future__ import annotations

import logging
from typing import Optional

from tripgraph.graph.builder import KnowledgeGraph
from tripgraph.graph.entities import TripData
from tripgraph.graph.peek import EntityIndex, peek
from tripgraph.graph.walk import WalkLimits, WalkStep, walk_graph_by_contact

logger = logging.getLogger(__name__)

EMPTY_GRAPH_TEXT = "No contacts, events, todos, or notes in the graph."
EMPTY_DATA_TEXT = "No contacts, events, todos, or notes yet."
ORPHAN_HEADER = "## Other (events, todos, notes not linked to contacts above)"
TRUNCATION_NOTE = "(Some contacts, events, todos, or notes were left out to keep this summary short.)"


def build_summary_input_from_graph(
    graph: KnowledgeGraph,
    data: TripData,
    limits: Optional[WalkLimits] = None,
) -> str:
    """Walk the graph, peek every step, and stitch sections by contact."""
    walk = walk_graph_by_contact(graph, limits)
    if not walk.steps:
        return EMPTY_GRAPH_TEXT

    index = EntityIndex(data)
    sections: list[str] = []

    contact_order: list[str] = []
    for step in walk.steps:
        if step.contact_id and step.contact_id not in contact_order:
            contact_order.append(step.contact_id)

    first_step_by_node: dict[str, WalkStep] = {}
    for step in walk.steps:
        first_step_by_node.setdefault(step.node_id, step)

    for cid in contact_order:
        contact_step = first_step_by_node.get(cid)
        if contact_step is None or contact_step.node_type != "contact":
            continue

        grouped: dict[str, list[str]] = {"contact": [], "event": [], "todo": [], "note": []}
        for step in walk.steps:
            if step.contact_id != cid:
                continue
            text = peek(step, index)
            if text and step.node_type in grouped:
                grouped[step.node_type].append(text)

        contact_node = graph.node(cid)
        sections.append(f"## {contact_node.label}" if contact_node else f"## Contact {cid}")
        sections.append(grouped["contact"][0] if grouped["contact"] else "")
        if grouped["event"]:
            sections.append(f"Events: {' | '.join(grouped['event'])}")
        if grouped["todo"]:
            sections.append(f"Todos: {' | '.join(grouped['todo'])}")
        if grouped["note"]:
            sections.append(f"Notes: {' | '.join(grouped['note'])}")
        sections.append("")

    orphans = [s for s in walk.steps if not s.contact_id]
    if orphans:
        sections.append(ORPHAN_HEADER)
        peeks = [p for p in (peek(s, index) for s in orphans) if p]
        sections.append("\n".join(peeks))

    if walk.truncated:
        if sections[-1] != "":
            sections.append("")
        sections.append(TRUNCATION_NOTE)

    blob = "\n".join(sections).strip()
    logger.debug(
        "Assembled summary input: %d contact sections, %d orphan steps, %d chars",
        len(contact_order), len(orphans), len(blob),
    )
    return blob


def build_flat_summary_input(data: TripData) -> str:
    """Flat concatenation used when there is nothing to build a graph from."""
    contact_list = [
        ", ".join(p for p in (c.name, c.company, c.role) if p)
        for c in data.contacts
    ]
    event_list = [
        f"{e.title or ''} ({e.start or ''})" + (f" at {e.location}" if e.location else "")
        for e in data.events
    ]
    todo_list = [
        f"{t.text or ''} (due {t.due_date})" if t.due_date else (t.text or "")
        for t in data.todos if not t.done
    ]
    dossier_summaries = [d.summary for d in data.dossiers if d.summary]
    note_list = [f"[{n.created_at or ''}] {n.content or ''}" for n in data.notes]

    sections = []
    if contact_list:
        sections.append(f"Contacts: {'; '.join(contact_list)}")
    if event_list:
        sections.append(f"Events: {'; '.join(event_list)}")
    if todo_list:
        sections.append(f"Open todos: {'; '.join(todo_list)}")
    if dossier_summaries:
        sections.append(f"Meeting summaries: {' | '.join(dossier_summaries)}")
    if note_list:
        sections.append(f"Trip notes: {' | '.join(note_list)}")

    return "\n\n".join(sections) if sections else EMPTY_DATA_TEXT
