"""Steady-state computation keyed by external vertex identifiers."""

import logging
from collections.abc import Hashable

from rwr.config.run import WalkConfig
from rwr.graph.builder import check_dimensions
from rwr.graph.types import GraphData
from rwr.walk.engine import RandomWalkEngine
from rwr.walk.types import SteadyState

log = logging.getLogger(__name__)


def compute_steady_state(
    graph: GraphData, source_vertex: Hashable, walk_config: WalkConfig
) -> SteadyState:
    """Run the random walk with restart from a source identifier.

    Args:
        graph: Built graph snapshot.
        source_vertex: External identifier of the restart vertex.
        walk_config: Restart probability, iteration count, initial
            distribution and worker count.

    Returns:
        SteadyState mapping every identifier to its probability.

    Raises:
        UnknownVertexError: If source_vertex is not in the graph.
        DimensionMismatchError: If the graph's matrices disagree with its index.
    """
    check_dimensions(graph)
    source_index = graph.index.index_of(source_vertex)
    log.info(
        "Source vertex %r resolved to index %d of %d",
        source_vertex,
        source_index,
        graph.n,
    )

    engine = RandomWalkEngine(graph.transition, num_workers=walk_config.num_workers)
    trace = engine.run(
        source_index,
        walk_config.restart_probability,
        walk_config.num_iterations,
        initial=walk_config.initial,
    )
    return SteadyState(trace=trace, index=graph.index, source_vertex=source_vertex)
