"""Build the trip knowledge graph from the four entity collections.

Nodes: contact, event, todo, note. Node ids are the entity ids, so the
graph is a view over the store rather than a separate id space.

Edges:
  attended  contact → event   (event's participants)
  todo_for  contact → todo    (todo's contacts)
  about     note → contact    (note's contacts)
  about     note → event      (note's events)

No I/O, no errors: references to ids that don't exist are dropped and
missing fields fall back to the entity id for labels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from tripgraph.graph.entities import Contact, Event, Note, Todo

logger = logging.getLogger(__name__)

LABEL_PREVIEW_CHARS = 60


@dataclass(frozen=True)
class GraphNode:
    id: str
    type: str
    label: str
    fields: dict[str, Any] = field(default_factory=dict, compare=True, hash=False)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "type": self.type, "label": self.label, **self.fields}


@dataclass(frozen=True)
class GraphEdge:
    from_id: str
    to_id: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_id, "to": self.to_id, "type": self.type}


@dataclass
class KnowledgeGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node(self, node_id: str, node_type: Optional[str] = None) -> Optional[GraphNode]:
        """First node with this id (and type, if given)."""
        for n in self.nodes:
            if n.id == node_id and (node_type is None or n.type == node_type):
                return n
        return None

    def nodes_of_type(self, node_type: str) -> list[GraphNode]:
        return [n for n in self.nodes if n.type == node_type]

    def edges_of_type(self, edge_type: str) -> list[GraphEdge]:
        return [e for e in self.edges if e.type == edge_type]

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# ══════════════════════════════════════════════════════════════════
# Labels
# ══════════════════════════════════════════════════════════════════

def contact_label(contact: Contact) -> str:
    name = contact.name or ""
    company = contact.company or ""
    if name and company:
        return f"{name} ({company})"
    return name or company or contact.id


def event_label(event: Event) -> str:
    return " – ".join(p for p in (event.title, event.start) if p) or event.id


def todo_label(todo: Todo) -> str:
    return (todo.text or "")[:LABEL_PREVIEW_CHARS] or todo.id


def note_label(note: Note) -> str:
    return (note.content or "")[:LABEL_PREVIEW_CHARS] or note.id


# ══════════════════════════════════════════════════════════════════
# Builder
# ══════════════════════════════════════════════════════════════════

def build_knowledge_graph(
    contacts: Iterable[Contact],
    events: Iterable[Event],
    todos: Iterable[Todo],
    notes: Iterable[Note],
) -> KnowledgeGraph:
    """Map the entity lists to nodes and edges.

    Pass 1 emits one node per record (contacts, events, todos, notes, in
    input order). Pass 2 re-scans events, todos and notes for edges,
    keeping only those whose endpoints exist with the right type.
    """
    contacts = list(contacts)
    events = list(events)
    todos = list(todos)
    notes = list(notes)

    graph = KnowledgeGraph()

    for c in contacts:
        graph.nodes.append(GraphNode(
            id=c.id, type="contact", label=contact_label(c),
            fields={"name": c.name, "company": c.company},
        ))
    for e in events:
        graph.nodes.append(GraphNode(
            id=e.id, type="event", label=event_label(e),
            fields={"title": e.title, "start": e.start},
        ))
    for t in todos:
        graph.nodes.append(GraphNode(
            id=t.id, type="todo", label=todo_label(t),
            fields={"text": t.text, "done": t.done},
        ))
    for n in notes:
        graph.nodes.append(GraphNode(
            id=n.id, type="note", label=note_label(n),
            fields={"content": n.content},
        ))

    contact_ids = {c.id for c in contacts}
    event_ids = {e.id for e in events}

    for e in events:
        for cid in e.effective_contact_ids:
            if cid in contact_ids:
                graph.edges.append(GraphEdge(cid, e.id, "attended"))
    for t in todos:
        for cid in t.contact_ids:
            if cid in contact_ids:
                graph.edges.append(GraphEdge(cid, t.id, "todo_for"))
    for n in notes:
        for cid in n.contact_ids:
            if cid in contact_ids:
                graph.edges.append(GraphEdge(n.id, cid, "about"))
        for eid in n.event_ids:
            if eid in event_ids:
                graph.edges.append(GraphEdge(n.id, eid, "about"))

    logger.debug("Built knowledge graph: %d nodes, %d edges", len(graph.nodes), len(graph.edges))
    return graph


def graph_to_summary(graph: KnowledgeGraph) -> str:
    """Short text overview of the graph for the assistant."""
    contacts = graph.nodes_of_type("contact")
    events = graph.nodes_of_type("event")
    open_todos = [t for t in graph.nodes_of_type("todo") if t.fields.get("done") is not True]

    def _labels(nodes: list[GraphNode]) -> str:
        return "; ".join(n.label for n in nodes) or "none"

    lines = [
        f"Contacts ({len(contacts)}): {_labels(contacts)}",
        f"Events ({len(events)}): {_labels(events)}",
        f"Open todos ({len(open_todos)}): {_labels(open_todos)}",
        f"Meeting links (contact–event): {len(graph.edges_of_type('attended'))}",
        f"Todo–contact links: {len(graph.edges_of_type('todo_for'))}",
    ]
    return "\n".join(lines)
