from conftest import make_data

from tripgraph.graph.builder import GraphEdge, build_knowledge_graph, graph_to_summary


def _build(data):
    return build_knowledge_graph(data.contacts, data.events, data.todos, data.notes)


def test_empty_inputs_give_empty_graph():
    graph = build_knowledge_graph([], [], [], [])
    assert graph.nodes == []
    assert graph.edges == []
    assert graph.to_dict() == {"nodes": [], "edges": []}


def test_single_contact_attending_event():
    data = make_data(
        contacts=[{"id": "c1", "name": "Jane", "company": "Acme"}],
        events=[{"id": "e1", "title": "Kickoff", "start": "2024-05-01T09:00", "contactIds": ["c1"]}],
    )
    graph = _build(data)

    assert [(n.id, n.label) for n in graph.nodes] == [
        ("c1", "Jane (Acme)"),
        ("e1", "Kickoff – 2024-05-01T09:00"),
    ]
    assert graph.edges == [GraphEdge("c1", "e1", "attended")]
    assert graph.to_dict()["edges"] == [{"from": "c1", "to": "e1", "type": "attended"}]


def test_dangling_legacy_contact_is_dropped():
    data = make_data(events=[{"id": "e1", "title": "Lunch", "contactId": "c99"}])
    graph = _build(data)
    assert [n.id for n in graph.nodes] == ["e1"]
    assert graph.edges == []


def test_node_order_and_edge_order(trip_data):
    graph = _build(trip_data)
    assert [n.id for n in graph.nodes] == [
        "c1", "c2", "c3", "e1", "e2", "e3", "t1", "t2", "t3", "n1", "n2",
    ]
    assert [(e.from_id, e.to_id, e.type) for e in graph.edges] == [
        ("c1", "e1", "attended"),
        ("c2", "e1", "attended"),
        ("c2", "e2", "attended"),
        ("c1", "t1", "todo_for"),
        ("n1", "c1", "about"),
        ("n1", "e1", "about"),
    ]


def test_edges_require_endpoint_of_right_type():
    # t1 references an event id as a contact; n1 references a contact id as an event
    data = make_data(
        contacts=[{"id": "c1", "name": "A"}],
        events=[{"id": "e1", "title": "E"}],
        todos=[{"id": "t1", "text": "x", "contactIds": ["e1"]}],
        tripNotes=[{"id": "n1", "content": "y", "eventIds": ["c1"], "contactIds": ["nope"]}],
    )
    assert _build(data).edges == []


def test_no_dangling_edges(trip_data):
    graph = _build(trip_data)
    ids = {n.id for n in graph.nodes}
    for e in graph.edges:
        assert e.from_id in ids
        assert e.to_id in ids


def test_build_is_deterministic(trip_data):
    assert _build(trip_data) == _build(trip_data)


def test_label_fallbacks():
    data = make_data(
        contacts=[{"id": "c1", "name": "", "company": ""}, {"id": "c2", "company": "Acme"}],
        events=[{"id": "e1"}, {"id": "e2", "start": "2024-05-01"}],
        todos=[{"id": "t1", "text": ""}, {"id": "t2", "text": "x" * 80}],
        tripNotes=[{"id": "n1"}],
    )
    labels = {n.id: n.label for n in _build(data).nodes}
    assert labels["c1"] == "c1"
    assert labels["c2"] == "Acme"
    assert labels["e1"] == "e1"
    assert labels["e2"] == "2024-05-01"
    assert labels["t1"] == "t1"
    assert labels["t2"] == "x" * 60
    assert labels["n1"] == "n1"


def test_node_dict_carries_display_fields():
    data = make_data(todos=[{"id": "t1", "text": "Pack", "done": True}])
    assert _build(data).to_dict()["nodes"] == [
        {"id": "t1", "type": "todo", "label": "Pack", "text": "Pack", "done": True},
    ]


def test_duplicate_ids_do_not_crash():
    data = make_data(
        contacts=[{"id": "c1", "name": "First"}, {"id": "c1", "name": "Second"}],
        events=[{"id": "e1", "contactIds": ["c1"]}],
    )
    graph = _build(data)
    assert len(graph.nodes) == 3
    assert graph.node("c1").label == "First"
    assert graph.edges == [GraphEdge("c1", "e1", "attended")]


def test_graph_to_summary(trip_data):
    text = graph_to_summary(_build(trip_data))
    lines = text.split("\n")
    assert lines[0] == "Contacts (3): Jane (Acme); Wei; Solo"
    assert lines[2] == "Open todos (2): Send deck; Book hotel"
    assert lines[3] == "Meeting links (contact–event): 3"
    assert lines[4] == "Todo–contact links: 1"


def test_graph_to_summary_empty():
    text = graph_to_summary(build_knowledge_graph([], [], [], []))
    assert "Contacts (0): none" in text
