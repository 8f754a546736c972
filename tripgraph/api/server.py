"""Minimal JSON HTTP surface over the graph pipeline.

Routes:
  GET  /api/knowledge-graph  → {"nodes": [...], "edges": [...]}
  POST /api/trip-summary     → {"summary": ..., "updatedAt": ...}

Each request loads its own snapshot, so concurrent requests share no state.
"""

from __future__ import annotations

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Optional
from urllib.parse import urlparse

from tripgraph.graph.builder import build_knowledge_graph
from tripgraph.graph.walk import WalkLimits
from tripgraph.store.base import TripStore
from tripgraph.summary import generate_trip_summary

logger = logging.getLogger(__name__)

GRAPH_PATH = "/api/knowledge-graph"
SUMMARY_PATH = "/api/trip-summary"


def make_handler(
    store_factory: Callable[[], TripStore],
    llm_factory: Callable[[], Any],
    limits: Optional[WalkLimits] = None,
) -> type[BaseHTTPRequestHandler]:
    """Build a request handler class bound to the given store and LLM factories.

    `llm_factory` raising ValueError means the model isn't configured (no
    API key); that is reported as 503 rather than 500.
    """

    class TripGraphHandler(BaseHTTPRequestHandler):
        def _send_json(self, status: int, payload: dict):
            body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def do_GET(self):
            if urlparse(self.path).path != GRAPH_PATH:
                self._send_json(404, {"error": "Not found"})
                return
            try:
                data = store_factory().load_trip_data()
                graph = build_knowledge_graph(data.contacts, data.events, data.todos, data.notes)
            except Exception:
                logger.exception("Failed to build knowledge graph")
                self._send_json(500, {"error": "Failed to build knowledge graph"})
                return
            self._send_json(200, graph.to_dict())

        def do_POST(self):
            if urlparse(self.path).path != SUMMARY_PATH:
                self._send_json(404, {"error": "Not found"})
                return
            try:
                llm = llm_factory()
            except ValueError as exc:
                logger.warning("Trip summary unavailable: %s", exc)
                self._send_json(503, {"error": "Add an LLM API key (tripgraph set-key) for trip summary."})
                return
            try:
                result = generate_trip_summary(store_factory(), llm, limits=limits)
            except Exception:
                logger.exception("Failed to generate trip summary")
                self._send_json(500, {"error": "Failed to generate trip summary"})
                return
            self._send_json(200, result.to_dict())

        def log_message(self, format, *args):
            logger.debug("%s - %s", self.address_string(), format % args)

    return TripGraphHandler


def create_server(
    host: str,
    port: int,
    store_factory: Callable[[], TripStore],
    llm_factory: Callable[[], Any],
    limits: Optional[WalkLimits] = None,
) -> ThreadingHTTPServer:
    handler = make_handler(store_factory, llm_factory, limits)
    return ThreadingHTTPServer((host, port), handler)
