"""Walk result data structures."""

from collections.abc import Hashable
from dataclasses import dataclass

import numpy as np

from rwr.graph.vertex_index import VertexIndex


@dataclass(frozen=True)
class WalkTrace:
    """Final distribution of one engine run and its per-step diagnostics.

    Uses frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__.
    """

    vector: np.ndarray  # float64 array of length n, v after the last step
    source_index: int
    alpha: float  # restart probability
    num_iterations: int
    initial: str  # "uniform" or "restart"
    mass_history: np.ndarray  # sum(v_t) for t = 0..num_iterations
    l1_changes: np.ndarray  # ||v_{t+1} - v_t||_1 for each step

    @property
    def n(self) -> int:
        return int(self.vector.shape[0])

    @property
    def mass(self) -> float:
        """Total probability mass of the final vector."""
        return float(self.mass_history[-1])


@dataclass(frozen=True)
class SteadyState:
    """A walk trace keyed back to the external vertex identifiers."""

    trace: WalkTrace
    index: VertexIndex
    source_vertex: Hashable

    @property
    def n(self) -> int:
        return self.index.size()

    @property
    def vector(self) -> np.ndarray:
        return self.trace.vector

    def as_mapping(self) -> dict[Hashable, float]:
        """Map each identifier to its probability, in index order."""
        return {
            identifier: float(value)
            for identifier, value in zip(self.index.identifiers, self.trace.vector)
        }

    def top(self, k: int) -> list[tuple[Hashable, float]]:
        """The k most probable vertices, ties broken by index order."""
        order = np.argsort(-self.trace.vector, kind="stable")[:k]
        return [
            (self.index.identifier_of(int(i)), float(self.trace.vector[i]))
            for i in order
        ]
