"""Accumulation of raw (source, target) edge pairs into an adjacency count matrix.

Edges are buffered as coordinate arrays and converted to CSR once, which sums
duplicate (i, j) entries. Memory stays proportional to the number of edges
rather than n^2.
"""

import logging
from collections.abc import Hashable, Iterable

import numpy as np
import scipy.sparse

from rwr.graph.vertex_index import VertexIndex

log = logging.getLogger(__name__)


class AdjacencyBuilder:
    """Builds A where A[i, j] is the number of edges from vertex i to vertex j.

    Both endpoints must already be registered in the vertex index (vertex
    list first, then edge list). Duplicate edges are additive and self-loops
    are counted like any other edge. The first edge freezes the index so that
    n cannot change once edges refer to it.
    """

    def __init__(self, index: VertexIndex) -> None:
        self.index = index
        self._rows: list[int] = []
        self._cols: list[int] = []

    @property
    def num_edges(self) -> int:
        """Number of edges added so far, duplicates included."""
        return len(self._rows)

    def add_edge(self, source_id: Hashable, target_id: Hashable) -> None:
        """Add one edge, raising UnknownVertexError for unregistered endpoints."""
        i = self.index.index_of(source_id)
        j = self.index.index_of(target_id)
        if not self.index.frozen:
            self.index.freeze()
        self._rows.append(i)
        self._cols.append(j)

    def add_edges(self, edges: Iterable[tuple[Hashable, Hashable]]) -> int:
        """Add every (source, target) pair from an iterable.

        Returns:
            Number of edges consumed from the iterable.
        """
        before = self.num_edges
        for source_id, target_id in edges:
            self.add_edge(source_id, target_id)
        return self.num_edges - before

    def build(self) -> scipy.sparse.csr_matrix:
        """Return the completed n x n adjacency matrix as float64 CSR."""
        n = self.index.size()
        rows = np.asarray(self._rows, dtype=np.int64)
        cols = np.asarray(self._cols, dtype=np.int64)
        data = np.ones(len(rows), dtype=np.float64)
        # COO -> CSR sums duplicate coordinates
        adjacency = scipy.sparse.coo_matrix(
            (data, (rows, cols)), shape=(n, n)
        ).tocsr()
        adjacency.sort_indices()
        log.debug(
            "Adjacency built: n=%d, edges=%d, distinct=%d",
            n,
            self.num_edges,
            adjacency.nnz,
        )
        return adjacency

    def out_degrees(self) -> np.ndarray:
        """Per-row edge counts (row sums of A), duplicates included."""
        return np.bincount(
            np.asarray(self._rows, dtype=np.int64), minlength=self.index.size()
        ).astype(np.float64)


def build_adjacency(
    index: VertexIndex, edges: Iterable[tuple[Hashable, Hashable]]
) -> scipy.sparse.csr_matrix:
    """Stream an edge iterator into an adjacency matrix over a vertex index.

    Args:
        index: Vertex index holding every identifier the edges may reference.
        edges: Iterable of (source identifier, target identifier) pairs.

    Returns:
        Sparse CSR adjacency count matrix of shape (n, n).

    Raises:
        UnknownVertexError: If an edge references an unregistered identifier.
    """
    builder = AdjacencyBuilder(index)
    builder.add_edges(edges)
    return builder.build()
