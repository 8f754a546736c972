"""Deterministic, bounded walk over the knowledge graph.

Walks by contact: the most connected contacts come first, each followed
by the events they attend, the todos for them and the notes about them.
Anything the contact pass didn't reach is picked up by an orphan pass.

Two caps keep the downstream LLM input bounded:
  - only the top `max_contacts` contacts by edge degree are walked
  - no more than `max_steps` steps are emitted overall

Truncation is reported on the result rather than hidden from the caller.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Optional

from tripgraph.graph.builder import GraphEdge, KnowledgeGraph

logger = logging.getLogger(__name__)

MAX_CONTACTS_IN_WALK = 20
MAX_NODES_TOTAL = 80


@dataclass(frozen=True)
class WalkLimits:
    max_contacts: int = MAX_CONTACTS_IN_WALK
    max_steps: int = MAX_NODES_TOTAL

    @classmethod
    def from_config(cls, config: dict) -> "WalkLimits":
        return cls(
            max_contacts=int(config.get("max_contacts", MAX_CONTACTS_IN_WALK)),
            max_steps=int(config.get("max_steps", MAX_NODES_TOTAL)),
        )


@dataclass(frozen=True)
class WalkStep:
    node_id: str
    node_type: str
    edge_context: str
    # Set when the step was emitted under a contact (used for grouping)
    contact_id: Optional[str] = None


@dataclass
class WalkResult:
    steps: list[WalkStep] = field(default_factory=list)
    truncated: bool = False
    contacts_dropped: int = 0
    nodes_dropped: int = 0

    def __iter__(self) -> Iterator[WalkStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)


def _edge_degrees(edges: list[GraphEdge]) -> Counter:
    degrees: Counter = Counter()
    for e in edges:
        degrees[e.from_id] += 1
        # A self-loop (note and contact sharing an id) counts once
        if e.to_id != e.from_id:
            degrees[e.to_id] += 1
    return degrees


def walk_graph_by_contact(
    graph: KnowledgeGraph,
    limits: WalkLimits | None = None,
) -> WalkResult:
    """Walk contacts by edge degree, then sweep up unvisited nodes."""
    limits = limits or WalkLimits()
    steps: list[WalkStep] = []
    seen: set[str] = set()

    contact_nodes = graph.nodes_of_type("contact")
    contact_id_set = {n.id for n in contact_nodes}
    attended = graph.edges_of_type("attended")
    todo_for = graph.edges_of_type("todo_for")
    about_contact = [e for e in graph.edges_of_type("about") if e.to_id in contact_id_set]

    degrees = _edge_degrees(graph.edges)
    # sorted() is stable: ties keep original node order
    ranked = sorted(contact_nodes, key=lambda n: -degrees[n.id])
    selected = ranked[:limits.max_contacts]

    def _room() -> bool:
        return len(steps) < limits.max_steps

    def _emit(node_id: str, node_type: str, context: str, contact_id: Optional[str] = None):
        seen.add(node_id)
        steps.append(WalkStep(node_id, node_type, context, contact_id))

    for contact in selected:
        if not _room():
            break
        cid = contact.id
        label = contact.label
        event_ids = [e.to_id for e in attended if e.from_id == cid]
        todo_ids = [e.to_id for e in todo_for if e.from_id == cid]
        note_ids = [e.from_id for e in about_contact if e.to_id == cid]

        if cid not in seen:
            _emit(
                cid, "contact",
                f"attends {len(event_ids)} event(s); {len(todo_ids)} todo(s) for them; "
                f"{len(note_ids)} note(s) about them",
                cid,
            )

        for node_ids, node_type, context in (
            (event_ids, "event", f"attended by {label}"),
            (todo_ids, "todo", f"for {label}"),
            (note_ids, "note", f"about {label}"),
        ):
            for nid in node_ids:
                if not _room():
                    break
                if nid in seen:
                    continue
                _emit(nid, node_type, context, cid)

    orphan_passes = (
        ("event", "not linked to a contact", lambda n: True),
        ("todo", "open todo", lambda n: n.fields.get("done") is not True),
        ("note", "trip note", lambda n: True),
    )
    for node_type, context, eligible in orphan_passes:
        for node in graph.nodes_of_type(node_type):
            if not _room():
                break
            if node.id in seen or not eligible(node):
                continue
            _emit(node.id, node_type, context)

    result = WalkResult(steps=steps)
    _account_for_drops(graph, result, seen, todo_for, {n.id for n in selected})

    if result.truncated:
        logger.info(
            "Graph walk truncated at %d steps (%d contacts, %d nodes left out)",
            len(steps), result.contacts_dropped, result.nodes_dropped,
        )
    else:
        logger.debug("Graph walk covered %d steps", len(steps))
    return result


def _account_for_drops(
    graph: KnowledgeGraph,
    result: WalkResult,
    seen: set[str],
    todo_for: list[GraphEdge],
    selected_ids: set[str],
):
    """Count walkable nodes that the caps kept out of the walk.

    Walkable: every contact, event and note, every open todo, and done
    todos attached to a walked contact. Done todos with no walked contact
    are never part of a walk, so their absence isn't truncation.
    """
    linked_todos = {e.to_id for e in todo_for if e.from_id in selected_ids}
    dropped_contacts: set[str] = set()
    dropped_other: set[str] = set()

    for node in graph.nodes:
        if node.id in seen:
            continue
        if node.type == "contact":
            dropped_contacts.add(node.id)
        elif node.type == "todo":
            if node.fields.get("done") is not True or node.id in linked_todos:
                dropped_other.add(node.id)
        else:
            dropped_other.add(node.id)

    result.contacts_dropped = len(dropped_contacts)
    result.nodes_dropped = len(dropped_other)
    result.truncated = bool(dropped_contacts or dropped_other)
