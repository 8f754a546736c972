"""Trip summary — turn the user's trip data into a short narrative.

Pipeline:
  1. Load the snapshot from the store
  2. Build the knowledge graph
  3. Graph has nodes → walk + peeks + assembly; otherwise flat fallback
  4. Render the trip_summary prompt and call the LLM
  5. Persist the summary and its timestamp to the user's settings
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from tripgraph.errors import SummaryError
from tripgraph.graph.assemble import build_flat_summary_input, build_summary_input_from_graph
from tripgraph.graph.builder import build_knowledge_graph
from tripgraph.graph.entities import TripData
from tripgraph.graph.walk import WalkLimits
from tripgraph.llm.loader import PromptTemplate, load_prompt
from tripgraph.store.base import TripStore

logger = logging.getLogger(__name__)

NO_SUMMARY_TEXT = "No summary generated."


@dataclass
class TripSummary:
    summary: str
    updated_at: str

    def to_dict(self) -> dict[str, str]:
        return {"summary": self.summary, "updatedAt": self.updated_at}


def build_trip_summary_input(data: TripData, limits: Optional[WalkLimits] = None) -> str:
    """Summarizer input for a snapshot: graph walk when possible, flat text otherwise."""
    graph = build_knowledge_graph(data.contacts, data.events, data.todos, data.notes)
    if graph.nodes:
        return build_summary_input_from_graph(graph, data, limits)
    logger.info("Knowledge graph is empty, using flat summary input")
    return build_flat_summary_input(data)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_trip_summary(
    store: TripStore,
    llm,
    limits: Optional[WalkLimits] = None,
    prompt: Optional[PromptTemplate] = None,
) -> TripSummary:
    """Generate, persist and return the trip summary.

    `llm` is anything with `run(system_prompt, user_message) -> str`.
    Store failures surface as StoreError, model failures as SummaryError.
    """
    t0 = time.time()
    data = store.load_trip_data()
    blob = build_trip_summary_input(data, limits)

    prompt = prompt or load_prompt("trip_summary")
    user_message = prompt.render(trip_range=data.settings.trip_range, data=blob)

    try:
        text = llm.run(prompt.system_prompt, user_message)
    except Exception as exc:
        raise SummaryError(f"Summarization failed: {exc}") from exc

    summary = (text or "").strip() or NO_SUMMARY_TEXT
    updated_at = _utc_now_iso()

    store.save_settings({"tripSummary": summary, "tripSummaryUpdatedAt": updated_at})

    logger.info("Trip summary generated (%d chars input, %.1fs)", len(blob), time.time() - t0)
    return TripSummary(summary=summary, updated_at=updated_at)
