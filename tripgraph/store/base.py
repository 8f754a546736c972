"""Interface shared by the entity store adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from tripgraph.graph.entities import TripData


class TripStore(ABC):
    """Source of one user's trip snapshot.

    Adapters return the whole snapshot at once so every pipeline run works
    on a consistent view of the data.
    """

    @abstractmethod
    def load_trip_data(self) -> TripData:
        ...

    @abstractmethod
    def save_settings(self, fields: Dict[str, Any]) -> None:
        """Merge camelCase settings fields into the user's settings record."""
