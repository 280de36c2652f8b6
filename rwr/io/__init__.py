"""Vertex/edge list readers and steady-state writers."""

from rwr.io.readers import iter_edges, read_vertices
from rwr.io.writers import STEADY_STATE_FILENAME, read_steady_state, write_steady_state

__all__ = [
    "STEADY_STATE_FILENAME",
    "iter_edges",
    "read_steady_state",
    "read_vertices",
    "write_steady_state",
]
