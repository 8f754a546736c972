"""Trip knowledge graph — build, walk, peek and assemble summarizer input."""

from tripgraph.graph.assemble import build_flat_summary_input, build_summary_input_from_graph
from tripgraph.graph.builder import GraphEdge, GraphNode, KnowledgeGraph, build_knowledge_graph, graph_to_summary
from tripgraph.graph.entities import Contact, Dossier, Event, Note, Todo, TripData, TripSettings
from tripgraph.graph.peek import EntityIndex, peek
from tripgraph.graph.walk import WalkLimits, WalkResult, WalkStep, walk_graph_by_contact

__all__ = [
    "Contact",
    "Dossier",
    "Event",
    "Note",
    "Todo",
    "TripData",
    "TripSettings",
    "GraphNode",
    "GraphEdge",
    "KnowledgeGraph",
    "build_knowledge_graph",
    "graph_to_summary",
    "WalkLimits",
    "WalkResult",
    "WalkStep",
    "walk_graph_by_contact",
    "EntityIndex",
    "peek",
    "build_summary_input_from_graph",
    "build_flat_summary_input",
]
