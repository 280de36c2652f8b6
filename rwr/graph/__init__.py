"""Graph construction: vertex index, adjacency counts, and transition matrix."""

from rwr.graph.adjacency import AdjacencyBuilder, build_adjacency
from rwr.graph.builder import build_graph, check_dimensions, check_transition
from rwr.graph.cache import (
    build_graph_from_files,
    generate_or_load_graph,
    graph_cache_key,
    load_graph,
    save_graph,
)
from rwr.graph.transition import (
    ROW_SUM_TOLERANCE,
    build_transition_matrix,
    dangling_vertices,
    out_degrees,
    validate_transition_matrix,
)
from rwr.graph.types import GraphData
from rwr.graph.vertex_index import VertexIndex

__all__ = [
    "AdjacencyBuilder",
    "GraphData",
    "ROW_SUM_TOLERANCE",
    "VertexIndex",
    "build_adjacency",
    "build_graph",
    "build_graph_from_files",
    "build_transition_matrix",
    "check_dimensions",
    "check_transition",
    "dangling_vertices",
    "generate_or_load_graph",
    "graph_cache_key",
    "load_graph",
    "out_degrees",
    "save_graph",
    "validate_transition_matrix",
]
