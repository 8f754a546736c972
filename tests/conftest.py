import json

import pytest

from tripgraph.graph.entities import TripData
from tripgraph.store.base import TripStore


def make_data(**collections) -> TripData:
    """TripData from raw camelCase dicts, as the store would return them."""
    return TripData.model_validate(collections)


class FakeStore(TripStore):
    def __init__(self, data: TripData):
        self.data = data
        self.saved: list[dict] = []

    def load_trip_data(self) -> TripData:
        return self.data

    def save_settings(self, fields):
        self.saved.append(dict(fields))


class FakeLLM:
    provider = "fake"
    model = "fake-model"

    def __init__(self, reply="A great trip."):
        self.reply = reply
        self.calls: list[tuple[str, str]] = []

    def run(self, system_prompt, user_message):
        self.calls.append((system_prompt, user_message))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def trip_raw():
    return {
        "contacts": [
            {"_id": "c1", "name": "Jane", "company": "Acme", "role": "CTO",
             "displaySummary": "Runs platform", "eventIds": ["e1"]},
            {"_id": "c2", "name": "Wei", "notes": "Met at expo"},
            {"_id": "c3", "name": "Solo"},
        ],
        "events": [
            {"_id": "e1", "title": "Kickoff", "start": "2024-05-01T09:00",
             "location": "Shanghai", "contactIds": ["c1", "c2"]},
            {"_id": "e2", "title": "Dinner", "start": "2024-05-02T19:00", "contactId": "c2"},
            {"_id": "e3", "title": "Factory tour"},
        ],
        "todos": [
            {"_id": "t1", "text": "Send deck", "done": False, "dueDate": "2024-05-03",
             "contactIds": ["c1"]},
            {"_id": "t2", "text": "Book hotel", "done": False},
            {"_id": "t3", "text": "Old task", "done": True},
        ],
        "tripNotes": [
            {"_id": "n1", "content": "Jane wants a pilot", "contactIds": ["c1"], "eventIds": ["e1"]},
            {"_id": "n2", "content": "Bring adapters"},
        ],
        "dossiers": [
            {"_id": "d1", "contactId": "c1", "eventId": "e1", "summary": "Agreed on pilot",
             "actionItems": ["Send pricing", "Intro to ops"]},
        ],
        "settings": {"tripStart": "2024-05-01", "tripEnd": "2024-05-10"},
    }


@pytest.fixture
def trip_data(trip_raw):
    return TripData.model_validate(trip_raw)


@pytest.fixture
def snapshot_file(tmp_path, trip_raw):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(trip_raw))
    return path
