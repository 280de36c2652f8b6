"""Graph construction: vertex list and edge stream to GraphData.

Composes the vertex index, adjacency builder and transition builder in one
process. The stages exchange matrices in memory rather than intermediate
files.
"""

import logging
from collections.abc import Hashable, Iterable

import scipy.sparse

from rwr.errors import DimensionMismatchError
from rwr.graph.adjacency import AdjacencyBuilder
from rwr.graph.transition import build_transition_matrix, validate_transition_matrix
from rwr.graph.types import GraphData
from rwr.graph.vertex_index import VertexIndex

log = logging.getLogger(__name__)


def check_dimensions(graph: GraphData) -> None:
    """Raise DimensionMismatchError if any matrix disagrees with the index size."""
    n = graph.index.size()
    expected = (n, n)
    if graph.n != n:
        raise DimensionMismatchError(f"GraphData.n={graph.n} but index has {n}")
    if graph.adjacency.shape != expected:
        raise DimensionMismatchError(
            f"Adjacency shape {graph.adjacency.shape} != {expected}"
        )
    if graph.transition.shape != expected:
        raise DimensionMismatchError(
            f"Transition shape {graph.transition.shape} != {expected}"
        )
    if graph.out_degrees.shape != (n,):
        raise DimensionMismatchError(
            f"Out-degree vector shape {graph.out_degrees.shape} != ({n},)"
        )


def check_transition(transition: scipy.sparse.spmatrix) -> None:
    """Raise DimensionMismatchError if T is not row-stochastic on nonzero rows."""
    errors = validate_transition_matrix(transition)
    if errors:
        log.warning("Transition matrix failed validation: %s", "; ".join(errors))
        raise DimensionMismatchError(
            "Transition matrix is not row-stochastic:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def build_graph(
    identifiers: Iterable[Hashable],
    edges: Iterable[tuple[Hashable, Hashable]],
) -> GraphData:
    """Build the vertex index and both matrices for one graph snapshot.

    Pipeline:
    1. Register identifiers in input order and freeze the index
    2. Accumulate edge counts (duplicates additive, self-loops kept)
    3. Row-normalize into the transition matrix
    4. Validate row sums and dimensions

    Args:
        identifiers: Vertex identifiers in input order.
        edges: (source identifier, target identifier) pairs.

    Returns:
        GraphData with index, adjacency, transition and out-degrees.

    Raises:
        UnknownVertexError: If an edge references an undeclared vertex.
        DimensionMismatchError: If the built matrices disagree with the index.
    """
    index = VertexIndex.from_identifiers(identifiers)

    builder = AdjacencyBuilder(index)
    builder.add_edges(edges)
    adjacency = builder.build()
    transition = build_transition_matrix(adjacency)
    check_transition(transition)

    graph = GraphData(
        index=index,
        adjacency=adjacency,
        transition=transition,
        out_degrees=builder.out_degrees(),
        n=index.size(),
        num_edges=builder.num_edges,
    )
    check_dimensions(graph)

    log.info(
        "Graph built: n=%d, edges=%d, dangling=%d",
        graph.n,
        graph.num_edges,
        len(graph.dangling),
    )
    return graph
