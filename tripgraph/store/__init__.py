from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from tripgraph.errors import ConfigError
from tripgraph.store.base import TripStore
from tripgraph.store.remote import RemoteStore
from tripgraph.store.snapshot import SnapshotStore

__all__ = [
    "TripStore",
    "RemoteStore",
    "SnapshotStore",
    "open_store",
]


REQUIRED_COLLECTIONS = ("contacts", "events", "todos", "tripNotes", "dossiers", "settings")


def open_store(config: Dict[str, Any]) -> TripStore:
    """Pick the backend when an API URL is configured, else the local snapshot."""
    if config.get("api_url"):
        collections = config.get("collections") or {}
        missing = [name for name in REQUIRED_COLLECTIONS if name not in collections]
        if missing:
            raise ConfigError(f"api_url is set but no endpoint is configured for: {', '.join(missing)}")
        return RemoteStore(
            api_url=config["api_url"],
            collections=collections,
            token=config.get("api_token"),
            timeout=float(config.get("request_timeout", 10)),
        )
    return SnapshotStore(Path(config["snapshot_path"]).expanduser())
