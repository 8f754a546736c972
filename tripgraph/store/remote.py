"""HTTP store adapter — fetch a user's collections from the trip backend.

The backend owns persistence and auth; this client just sends an opaque
bearer token and reads JSON lists back.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from tripgraph.errors import StoreError
from tripgraph.graph.entities import TripData
from tripgraph.store.base import TripStore

logger = logging.getLogger(__name__)


class RemoteStore(TripStore):
    """Loads the trip snapshot from the backend's list endpoints."""

    def __init__(
        self,
        api_url: str,
        collections: Dict[str, str],
        token: Optional[str] = None,
        timeout: float = 10,
    ):
        self.api_url = api_url.rstrip("/")
        self.collections = dict(collections)
        self.token = token
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, name: str) -> Any:
        url = f"{self.api_url}{self.collections[name]}"
        try:
            resp = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise StoreError(f"Error fetching {name}: {exc}") from exc

        if resp.status_code != 200:
            raise StoreError(f"Failed to fetch {name}: HTTP {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            raise StoreError(f"Invalid JSON from {name} endpoint") from exc

    def load_trip_data(self) -> TripData:
        """Fetch every collection in parallel and validate the snapshot."""
        names = list(self.collections)
        with ThreadPoolExecutor(max_workers=len(names) or 1) as executor:
            futures = {name: executor.submit(self._get, name) for name in names}
            # .result() re-raises the first StoreError from a worker
            raw = {name: futures[name].result() for name in names}

        try:
            data = TripData.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(f"Backend returned malformed records: {exc}") from exc

        logger.info(
            "Fetched %d contacts, %d events, %d todos, %d notes, %d dossiers from %s",
            len(data.contacts), len(data.events), len(data.todos),
            len(data.notes), len(data.dossiers), self.api_url,
        )
        return data

    def save_settings(self, fields: Dict[str, Any]) -> None:
        if "settings" not in self.collections:
            raise StoreError("No settings endpoint configured")
        url = f"{self.api_url}{self.collections['settings']}"
        try:
            resp = requests.patch(url, headers=self._headers(), json=fields, timeout=self.timeout)
        except requests.RequestException as exc:
            raise StoreError(f"Error saving settings: {exc}") from exc

        if resp.status_code not in (200, 204):
            raise StoreError(f"Failed to save settings: HTTP {resp.status_code}")
