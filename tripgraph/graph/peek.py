"""Entity peeks — render a walk step's full record as one line of context.

A peek goes past the graph label: it looks up the whole entity in the
snapshot, plus related records that are not graph nodes (meeting
dossiers), and formats them for the summarizer. Pure formatting; every
record must already be in the snapshot.
"""

from __future__ import annotations

import logging
from typing import Optional

from tripgraph.graph.builder import contact_label, event_label
from tripgraph.graph.entities import Contact, Dossier, Event, Note, Todo, TripData
from tripgraph.graph.walk import WalkStep

logger = logging.getLogger(__name__)

RESEARCH_PREVIEW_CHARS = 300


class EntityIndex:
    """id → record maps over one snapshot, built once per pipeline run.

    First occurrence wins when the store hands back duplicate ids.
    """

    def __init__(self, data: TripData):
        self.data = data
        self.contacts = _first_by_id(data.contacts)
        self.events = _first_by_id(data.events)
        self.todos = _first_by_id(data.todos)
        self.notes = _first_by_id(data.notes)

    def dossiers_for_contact(self, contact_id: str) -> list[Dossier]:
        return [d for d in self.data.dossiers if d.contact_id == contact_id]

    def dossiers_for_event(self, event_id: str) -> list[Dossier]:
        return [d for d in self.data.dossiers if d.event_id == event_id]

    def contact_labels(self, contact_ids: list[str]) -> list[str]:
        return [contact_label(self.contacts[cid]) for cid in contact_ids if cid in self.contacts]

    def event_labels(self, event_ids: list[str]) -> list[str]:
        return [event_label(self.events[eid]) for eid in event_ids if eid in self.events]


def _first_by_id(records) -> dict:
    index: dict = {}
    for r in records:
        index.setdefault(r.id, r)
    return index


def _dossier_summaries(dossiers: list[Dossier]) -> Optional[str]:
    summaries = [d.summary for d in dossiers if d.summary]
    if summaries:
        return f"Meeting summaries: {' | '.join(summaries)}"
    return None


def peek_contact(contact: Contact, index: EntityIndex) -> str:
    lines = [f"Contact: {contact_label(contact)}"]
    if contact.role:
        lines.append(f"Role: {contact.role}")
    if contact.notes:
        lines.append(f"Notes: {contact.notes}")
    if contact.display_summary:
        lines.append(f"Summary: {contact.display_summary}")
    if contact.research_summary:
        research = contact.research_summary
        ellipsis = "…" if len(research) > RESEARCH_PREVIEW_CHARS else ""
        lines.append(f"Research: {research[:RESEARCH_PREVIEW_CHARS]}{ellipsis}")

    dossiers = index.dossiers_for_contact(contact.id)
    summaries = _dossier_summaries(dossiers)
    if summaries:
        lines.append(summaries)
    actions = [a for d in dossiers for a in d.action_items]
    if actions:
        lines.append(f"Action items: {'; '.join(actions)}")
    return ". ".join(lines)


def peek_event(event: Event, index: EntityIndex) -> str:
    lines = [f"Event: {event_label(event)}"]
    if event.location:
        lines.append(f"Location: {event.location}")
    if event.notes:
        lines.append(f"Notes: {event.notes}")
    attendees = index.contact_labels(event.effective_contact_ids)
    if attendees:
        lines.append(f"Attendees: {', '.join(attendees)}")
    summaries = _dossier_summaries(index.dossiers_for_event(event.id))
    if summaries:
        lines.append(summaries)
    return ". ".join(lines)


def peek_todo(todo: Todo, index: EntityIndex) -> str:
    parts = [todo.text] if todo.text else []
    if todo.due_date:
        parts.append(f"(due {todo.due_date})")
    owners = index.contact_labels(todo.contact_ids)
    if owners:
        parts.append(f"for {', '.join(owners)}")
    return " ".join(parts)


def peek_note(note: Note, index: EntityIndex) -> str:
    parts = [f"Note: {(note.content or '').strip()}"]
    about = index.contact_labels(note.contact_ids) + index.event_labels(note.event_ids)
    if about:
        parts.append(f"(about: {', '.join(about)})")
    return " ".join(parts)


_PEEKERS = {
    "contact": ("Contact", "contacts", peek_contact),
    "event": ("Event", "events", peek_event),
    "todo": ("Todo", "todos", peek_todo),
    "note": ("Note", "notes", peek_note),
}


def peek(step: WalkStep, index: EntityIndex) -> str:
    """Render the full record behind a walk step.

    Returns a bracketed placeholder when the id isn't in the snapshot,
    and an empty string for unknown node types.
    """
    entry = _PEEKERS.get(step.node_type)
    if entry is None:
        return ""
    type_name, attr, render = entry
    record = getattr(index, attr).get(step.node_id)
    if record is None:
        logger.warning("Peek: %s %s not in snapshot", step.node_type, step.node_id)
        return f"[{type_name} {step.node_id}: not found]"
    return render(record, index)
