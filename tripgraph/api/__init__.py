from tripgraph.api.server import create_server, make_handler

__all__ = [
    "create_server",
    "make_handler",
]
