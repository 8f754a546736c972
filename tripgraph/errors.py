"""Exceptions raised by the adapters around the graph pipeline."""


class TripGraphError(Exception):
    """Base class for tripgraph errors."""


class ConfigError(TripGraphError):
    """Configuration is missing or unusable."""


class StoreError(TripGraphError):
    """Loading from or saving to the entity store failed."""


class SummaryError(TripGraphError):
    """The summarization model call failed."""
