"""Typed records for the entities that feed the knowledge graph.

The document store hands back loosely-shaped JSON: camelCase keys, most
fields optional, arbitrary extra keys, and `_id` instead of `id` on some
documents. These models absorb all of that at the boundary so the graph
code can rely on plain attributes.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _clean_id_list(v) -> list[str]:
    if not isinstance(v, list):
        return []
    return [str(x) for x in v if x is not None and str(x)]


def _clean_text(v) -> Optional[str]:
    # Numbers and booleans become text; containers and blanks become None
    if isinstance(v, str):
        return v or None
    if isinstance(v, (bool, int, float)):
        return str(v)
    return None


class Record(BaseModel):
    """Base for store documents. Everything but `id` is optional."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = ""

    @model_validator(mode="before")
    @classmethod
    def accept_native_id(cls, values):
        # Documents straight from the store carry `_id` instead of `id`
        if isinstance(values, dict) and not values.get("id") and values.get("_id"):
            values = dict(values)
            values["id"] = values["_id"]
        return values

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return "" if v is None else str(v)


class Contact(Record):
    name: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    notes: Optional[str] = None
    display_summary: Optional[str] = Field(default=None, alias="displaySummary")
    research_summary: Optional[str] = Field(default=None, alias="researchSummary")
    # Informational only; attendance edges come from the event side.
    event_ids: list[str] = Field(default_factory=list, alias="eventIds")

    @field_validator(
        "name", "company", "role", "notes", "display_summary", "research_summary", mode="before"
    )
    @classmethod
    def clean_text(cls, v):
        return _clean_text(v)

    @field_validator("event_ids", mode="before")
    @classmethod
    def clean_event_ids(cls, v):
        return _clean_id_list(v)


class Event(Record):
    title: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    contact_ids: list[str] = Field(default_factory=list, alias="contactIds")
    contact_id: Optional[str] = Field(default=None, alias="contactId")  # legacy

    @field_validator("title", "start", "end", "location", "notes", "contact_id", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_text(v)

    @field_validator("contact_ids", mode="before")
    @classmethod
    def clean_contact_ids(cls, v):
        return _clean_id_list(v)

    @property
    def effective_contact_ids(self) -> list[str]:
        """Participants, falling back to the legacy singular field."""
        if self.contact_ids:
            return list(self.contact_ids)
        if self.contact_id:
            return [self.contact_id]
        return []


class Todo(Record):
    text: Optional[str] = None
    done: bool = False
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    contact_ids: list[str] = Field(default_factory=list, alias="contactIds")

    @field_validator("text", "due_date", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_text(v)

    @field_validator("contact_ids", mode="before")
    @classmethod
    def clean_contact_ids(cls, v):
        return _clean_id_list(v)

    @field_validator("done", mode="before")
    @classmethod
    def strict_done(cls, v):
        return v is True


class Note(Record):
    content: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    contact_ids: list[str] = Field(default_factory=list, alias="contactIds")
    event_ids: list[str] = Field(default_factory=list, alias="eventIds")

    @field_validator("content", "created_at", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_text(v)

    @field_validator("contact_ids", "event_ids", mode="before")
    @classmethod
    def clean_ids(cls, v):
        return _clean_id_list(v)


class Dossier(Record):
    """Meeting dossier. Looked up during peeks, never a graph node."""

    contact_id: Optional[str] = Field(default=None, alias="contactId")
    event_id: Optional[str] = Field(default=None, alias="eventId")
    summary: Optional[str] = None
    action_items: list[str] = Field(default_factory=list, alias="actionItems")

    @field_validator("contact_id", "event_id", "summary", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_text(v)

    @field_validator("action_items", mode="before")
    @classmethod
    def clean_action_items(cls, v):
        if not isinstance(v, list):
            return []
        return [str(a) for a in v if a]


class TripSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    trip_start: str = Field(default="", alias="tripStart")
    trip_end: str = Field(default="", alias="tripEnd")
    timezone: str = ""
    trip_summary: Optional[str] = Field(default=None, alias="tripSummary")
    trip_summary_updated_at: Optional[str] = Field(default=None, alias="tripSummaryUpdatedAt")

    @field_validator("trip_start", "trip_end", "timezone", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return _clean_text(v) or ""

    @field_validator("trip_summary", "trip_summary_updated_at", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_text(v)

    @property
    def trip_range(self) -> str:
        start = self.trip_start.strip()
        end = self.trip_end.strip()
        return f"{start} to {end}" if start and end else "not set"


class TripData(BaseModel):
    """One request-scoped snapshot of everything the pipeline reads."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    contacts: list[Contact] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    todos: list[Todo] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list, alias="tripNotes")
    dossiers: list[Dossier] = Field(default_factory=list)
    settings: TripSettings = Field(default_factory=TripSettings)

    @field_validator("contacts", "events", "todos", "notes", "dossiers", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    @field_validator("settings", mode="before")
    @classmethod
    def none_as_default(cls, v):
        return v or {}

    @property
    def is_empty(self) -> bool:
        return not (self.contacts or self.events or self.todos or self.notes)
