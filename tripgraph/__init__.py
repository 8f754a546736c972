"""tripgraph — trip knowledge graph and summarizer input."""

__version__ = "0.1.0"
