"""Local JSON snapshot store.

The snapshot file has the same shape the document store exports:

    {
      "contacts": [...], "events": [...], "todos": [...],
      "tripNotes": [...], "dossiers": [...], "settings": {...}
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from tripgraph.config import DEFAULT_SNAPSHOT_PATH
from tripgraph.errors import StoreError
from tripgraph.graph.entities import TripData
from tripgraph.store.base import TripStore

logger = logging.getLogger(__name__)


class SnapshotStore(TripStore):
    """Reads and writes a single JSON snapshot file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_SNAPSHOT_PATH

    def _read_raw(self) -> Dict[str, Any]:
        if not self.path.exists():
            raise StoreError(f"Snapshot not found: {self.path}")
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise StoreError(f"Failed to read snapshot {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StoreError(f"Snapshot {self.path} is not a JSON object")
        return raw

    def load_trip_data(self) -> TripData:
        raw = self._read_raw()
        try:
            data = TripData.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(f"Snapshot {self.path} has malformed records: {exc}") from exc

        logger.info(
            "Loaded snapshot %s: %d contacts, %d events, %d todos, %d notes, %d dossiers",
            self.path, len(data.contacts), len(data.events), len(data.todos),
            len(data.notes), len(data.dossiers),
        )
        return data

    def save_settings(self, fields: Dict[str, Any]) -> None:
        raw = self._read_raw()
        settings = raw.get("settings") or {}
        settings.update(fields)
        raw["settings"] = settings
        try:
            self.path.write_text(json.dumps(raw, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to write snapshot {self.path}: {exc}") from exc
        logger.debug("Saved settings fields %s to %s", sorted(fields), self.path)
