from tripgraph.graph.entities import Contact, Event, Note, Todo, TripData, TripSettings


def test_native_id_and_camel_case_fields():
    c = Contact.model_validate({"_id": "abc", "name": "Jane", "displaySummary": "hi", "extra": 1})
    assert c.id == "abc"
    assert c.display_summary == "hi"


def test_missing_id_defaults_to_blank():
    assert Todo.model_validate({"text": "x"}).id == ""


def test_effective_contact_ids_prefers_list():
    e = Event.model_validate({"id": "e", "contactIds": ["c1"], "contactId": "c2"})
    assert e.effective_contact_ids == ["c1"]


def test_effective_contact_ids_falls_back_to_legacy_field():
    e = Event.model_validate({"id": "e", "contactIds": [], "contactId": "c2"})
    assert e.effective_contact_ids == ["c2"]
    assert Event.model_validate({"id": "e"}).effective_contact_ids == []


def test_id_lists_tolerate_junk():
    n = Note.model_validate({"id": "n", "contactIds": None, "eventIds": ["e1", None, ""]})
    assert n.contact_ids == []
    assert n.event_ids == ["e1"]


def test_done_only_true_when_literally_true():
    assert Todo.model_validate({"id": "t", "done": "yes"}).done is False
    assert Todo.model_validate({"id": "t", "done": True}).done is True


def test_trip_data_accepts_trip_notes_key_and_nulls():
    data = TripData.model_validate({"tripNotes": [{"id": "n1"}], "events": None, "settings": None})
    assert [n.id for n in data.notes] == ["n1"]
    assert data.events == []
    assert data.settings.trip_range == "not set"


def test_trip_range():
    s = TripSettings.model_validate({"tripStart": "2024-05-01", "tripEnd": "2024-05-10"})
    assert s.trip_range == "2024-05-01 to 2024-05-10"


def test_non_string_text_fields_are_coerced():
    data = TripData.model_validate({
        "contacts": [{"id": "c1", "name": "Jane", "company": 42, "role": {"x": 1}}],
        "events": [{"id": 7, "title": 2024, "start": "", "contactId": 3}],
        "todos": [{"id": "t1", "text": True}],
        "dossiers": [{"id": "d1", "summary": 1.5}],
        "settings": {"tripStart": 20240501, "tripEnd": "2024-05-10"},
    })
    contact = data.contacts[0]
    assert contact.company == "42"
    assert contact.role is None
    event = data.events[0]
    assert (event.id, event.title, event.start) == ("7", "2024", None)
    assert event.effective_contact_ids == ["3"]
    assert data.todos[0].text == "True"
    assert data.dossiers[0].summary == "1.5"
    assert data.settings.trip_range == "20240501 to 2024-05-10"
