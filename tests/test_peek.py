from conftest import make_data

from tripgraph.graph.peek import EntityIndex, peek
from tripgraph.graph.walk import WalkStep


def _peek(data, node_id, node_type):
    return peek(WalkStep(node_id, node_type, ""), EntityIndex(data))


def test_contact_peek_with_dossiers(trip_data):
    assert _peek(trip_data, "c1", "contact") == (
        "Contact: Jane (Acme). Role: CTO. Summary: Runs platform. "
        "Meeting summaries: Agreed on pilot. Action items: Send pricing; Intro to ops"
    )


def test_contact_peek_minimal(trip_data):
    assert _peek(trip_data, "c2", "contact") == "Contact: Wei. Notes: Met at expo"


def test_research_is_truncated_with_ellipsis():
    data = make_data(contacts=[{"id": "c1", "name": "R", "researchSummary": "a" * 301}])
    text = _peek(data, "c1", "contact")
    assert text == f"Contact: R. Research: {'a' * 300}…"


def test_research_at_limit_is_not_marked():
    data = make_data(contacts=[{"id": "c1", "name": "R", "researchSummary": "a" * 300}])
    assert _peek(data, "c1", "contact").endswith("a" * 300)


def test_event_peek(trip_data):
    assert _peek(trip_data, "e1", "event") == (
        "Event: Kickoff – 2024-05-01T09:00. Location: Shanghai. "
        "Attendees: Jane (Acme), Wei. Meeting summaries: Agreed on pilot"
    )


def test_event_peek_uses_legacy_contact(trip_data):
    assert _peek(trip_data, "e2", "event") == "Event: Dinner – 2024-05-02T19:00. Attendees: Wei"


def test_event_peek_skips_unknown_attendees():
    data = make_data(events=[{"id": "e1", "title": "Call", "contactIds": ["ghost"]}])
    assert _peek(data, "e1", "event") == "Event: Call"


def test_todo_peek(trip_data):
    assert _peek(trip_data, "t1", "todo") == "Send deck (due 2024-05-03) for Jane (Acme)"
    assert _peek(trip_data, "t2", "todo") == "Book hotel"


def test_note_peek(trip_data):
    assert _peek(trip_data, "n1", "note") == (
        "Note: Jane wants a pilot (about: Jane (Acme), Kickoff – 2024-05-01T09:00)"
    )
    assert _peek(trip_data, "n2", "note") == "Note: Bring adapters"


def test_note_content_is_stripped():
    data = make_data(tripNotes=[{"id": "n1", "content": "  spaced out \n"}])
    assert _peek(data, "n1", "note") == "Note: spaced out"


def test_missing_records_give_placeholders(trip_data):
    assert _peek(trip_data, "zz", "contact") == "[Contact zz: not found]"
    assert _peek(trip_data, "zz", "event") == "[Event zz: not found]"
    assert _peek(trip_data, "zz", "todo") == "[Todo zz: not found]"
    assert _peek(trip_data, "zz", "note") == "[Note zz: not found]"


def test_unknown_node_type_is_empty(trip_data):
    assert _peek(trip_data, "c1", "dossier") == ""


def test_index_first_occurrence_wins():
    data = make_data(contacts=[{"id": "c1", "name": "First"}, {"id": "c1", "name": "Second"}])
    assert _peek(data, "c1", "contact") == "Contact: First"
