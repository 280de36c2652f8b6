"""Graph data structures for matrix construction and storage."""

from dataclasses import dataclass

import numpy as np
import scipy.sparse

from rwr.graph.vertex_index import VertexIndex


@dataclass(frozen=True)
class GraphData:
    """Immutable container for one graph snapshot and its derived matrices.

    Holds the vertex index, the adjacency count matrix, the row-stochastic
    transition matrix, and per-vertex out-degrees. Uses frozen=True but omits
    slots=True since numpy/scipy objects don't interact well with __slots__.
    """

    index: VertexIndex  # identifier <-> dense index, frozen
    adjacency: scipy.sparse.csr_matrix  # edge counts (n x n)
    transition: scipy.sparse.csr_matrix  # row-normalized adjacency (n x n)
    out_degrees: np.ndarray  # float array of length n, row sums of adjacency
    n: int  # number of vertices
    num_edges: int  # edges read, duplicates included

    @property
    def dangling(self) -> np.ndarray:
        """Indices of vertices with no outgoing edges."""
        return np.flatnonzero(self.out_degrees == 0)
