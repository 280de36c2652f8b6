"""Random walk with restart by fixed-count power iteration.

Each step computes

    v_{t+1} = (1 - alpha) * T^T v_t + alpha * r

where T is the row-stochastic transition matrix and r puts all its mass on
the source vertex. The new vector is built entirely from the previous one
(synchronous update), so the result does not depend on traversal order.

The engine runs exactly num_iterations steps and never stops early on a
convergence threshold; the per-step L1 change is recorded instead so the
caller can judge convergence.

With num_workers > 1 the rows of T^T (one per output vertex) are split into
contiguous blocks of roughly equal nnz and evaluated on a thread pool. Each
block reads its rows from the shared CSR arrays of T^T, writes a disjoint
slice of the output vector, and all blocks finish before the next step
starts. Each row is summed in stored order in both modes, so the results
match the single-worker path.
"""

import logging
from concurrent.futures import Executor, ThreadPoolExecutor

import numpy as np
import scipy.sparse

from rwr.config.run import INITIAL_DISTRIBUTIONS
from rwr.errors import DimensionMismatchError, InvalidParameterError
from rwr.walk.types import WalkTrace

log = logging.getLogger(__name__)


def validate_walk_parameters(
    n: int, source_index: int, alpha: float, num_iterations: int
) -> None:
    """Raise InvalidParameterError unless every walk precondition holds.

    Preconditions: 0 < alpha < 1 (both bounds excluded), num_iterations is an
    integer >= 1, and 0 <= source_index < n.
    """
    if not 0.0 < alpha < 1.0:
        raise InvalidParameterError(
            f"alpha must be strictly between 0 and 1, got {alpha}"
        )
    if isinstance(num_iterations, bool) or not isinstance(
        num_iterations, (int, np.integer)
    ):
        raise InvalidParameterError(
            f"num_iterations must be an integer, got {num_iterations!r}"
        )
    if num_iterations < 1:
        raise InvalidParameterError(
            f"num_iterations must be >= 1, got {num_iterations}"
        )
    if isinstance(source_index, bool) or not isinstance(
        source_index, (int, np.integer)
    ):
        raise InvalidParameterError(
            f"source_index must be an integer, got {source_index!r}"
        )
    if not 0 <= source_index < n:
        raise InvalidParameterError(
            f"source_index {source_index} out of range [0, {n})"
        )


def restart_vector(n: int, source_index: int) -> np.ndarray:
    """Teleport distribution: 1.0 at the source, 0.0 elsewhere."""
    r = np.zeros(n, dtype=np.float64)
    r[source_index] = 1.0
    return r


def initial_vector(n: int, source_index: int, initial: str = "uniform") -> np.ndarray:
    """Starting distribution v_0.

    "uniform" spreads 1/n over every vertex; "restart" starts from r.
    """
    if initial == "uniform":
        return np.full(n, 1.0 / n, dtype=np.float64)
    if initial == "restart":
        return restart_vector(n, source_index)
    raise InvalidParameterError(
        f"initial must be one of {INITIAL_DISTRIBUTIONS}, got {initial!r}"
    )


def mass_loss_bound(alpha: float, iteration: int) -> float:
    """Upper bound on 1 - sum(v_t) caused by dangling rows.

    With d_t = 1 - sum(v_t), each step gives d_{t+1} = (1 - alpha)(d_t + m_t)
    where m_t <= 1 - d_t is the mass sitting on dangling vertices, so
    d_{t+1} <= 1 - alpha. v_0 is a full distribution, hence d_0 = 0.
    """
    if iteration <= 0:
        return 0.0
    return 1.0 - alpha


def _partition_rows(indptr: np.ndarray, num_blocks: int) -> list[tuple[int, int]]:
    """Split CSR rows into at most num_blocks contiguous ranges of similar nnz."""
    n = len(indptr) - 1
    targets = np.linspace(0, indptr[-1], num_blocks + 1)[1:-1]
    cuts = np.searchsorted(indptr, targets, side="left")
    bounds = np.unique(np.concatenate(([0], cuts, [n])).astype(np.int64))
    return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:])]


class RandomWalkEngine:
    """Power iteration over a fixed, read-only transition matrix.

    The engine owns only its working vectors; the matrix is never modified
    and may be shared between engines and threads.
    """

    def __init__(
        self, transition: scipy.sparse.spmatrix, num_workers: int = 1
    ) -> None:
        n_rows, n_cols = transition.shape
        if n_rows != n_cols:
            raise DimensionMismatchError(
                f"Transition matrix must be square, got shape {transition.shape}"
            )
        if num_workers < 1:
            raise InvalidParameterError(
                f"num_workers must be >= 1, got {num_workers}"
            )

        self.transition = scipy.sparse.csr_matrix(transition, dtype=np.float64)
        self.n = n_rows
        self.num_workers = num_workers

        # Row j of T^T gathers every edge into vertex j
        self._propagator = self.transition.T.tocsr()
        self._propagator.sort_indices()
        self._blocks = _partition_rows(self._propagator.indptr, num_workers)

    def _propagate_rows(self, start: int, stop: int, v: np.ndarray) -> np.ndarray:
        """Rows start:stop of T^T v, read straight from the shared CSR arrays."""
        indptr = self._propagator.indptr
        lo, hi = indptr[start], indptr[stop]
        rows = np.repeat(np.arange(stop - start), np.diff(indptr[start : stop + 1]))
        products = self._propagator.data[lo:hi] * v[self._propagator.indices[lo:hi]]
        return np.bincount(rows, weights=products, minlength=stop - start)

    def propagate(self, v: np.ndarray, executor: Executor | None = None) -> np.ndarray:
        """Compute T^T v into a fresh vector."""
        if executor is None or len(self._blocks) == 1:
            return self._propagator @ v

        out = np.empty(self.n, dtype=np.float64)

        def _fill(block: int) -> None:
            start, stop = self._blocks[block]
            out[start:stop] = self._propagate_rows(start, stop, v)

        # list() waits for every block: the barrier between v_t and v_{t+1}
        list(executor.map(_fill, range(len(self._blocks))))
        return out

    def step(
        self,
        v: np.ndarray,
        restart: np.ndarray,
        alpha: float,
        executor: Executor | None = None,
    ) -> np.ndarray:
        """One synchronous update: (1 - alpha) * T^T v + alpha * r."""
        if v.shape != (self.n,) or restart.shape != (self.n,):
            raise DimensionMismatchError(
                f"Vectors must have shape ({self.n},), got {v.shape} and "
                f"{restart.shape}"
            )
        propagated = self.propagate(v, executor)
        return (1.0 - alpha) * propagated + alpha * restart

    def run(
        self,
        source_index: int,
        alpha: float,
        num_iterations: int,
        initial: str = "uniform",
    ) -> WalkTrace:
        """Run exactly num_iterations steps from the chosen initial vector.

        Args:
            source_index: Dense index of the restart vertex.
            alpha: Restart probability, strictly between 0 and 1.
            num_iterations: Number of steps, >= 1.
            initial: "uniform" (v_0 = 1/n everywhere) or "restart" (v_0 = r).

        Returns:
            WalkTrace with the final vector and per-step mass and L1 change.

        Raises:
            InvalidParameterError: If a precondition is violated. Nothing is
                computed in that case.
        """
        validate_walk_parameters(self.n, source_index, alpha, num_iterations)
        v = initial_vector(self.n, source_index, initial)
        restart = restart_vector(self.n, source_index)

        mass_history = np.empty(num_iterations + 1, dtype=np.float64)
        l1_changes = np.empty(num_iterations, dtype=np.float64)
        mass_history[0] = v.sum()

        if self.n == 1:
            # The only distribution over one vertex
            v = np.ones(1, dtype=np.float64)
            mass_history[:] = 1.0
            l1_changes[:] = 0.0
            log.debug("Single-vertex graph: returning [1.0]")
        else:
            executor = (
                ThreadPoolExecutor(max_workers=len(self._blocks))
                if len(self._blocks) > 1
                else None
            )
            try:
                for t in range(num_iterations):
                    v_next = self.step(v, restart, alpha, executor)
                    l1_changes[t] = np.abs(v_next - v).sum()
                    mass_history[t + 1] = v_next.sum()
                    log.debug(
                        "Iteration %d: mass=%.12f, l1_change=%.3e",
                        t + 1,
                        mass_history[t + 1],
                        l1_changes[t],
                    )
                    v = v_next
            finally:
                if executor is not None:
                    executor.shutdown(wait=True)

        log.info(
            "Random walk finished: n=%d, source=%d, alpha=%g, iterations=%d, "
            "mass=%.12f, last_l1_change=%.3e",
            self.n,
            source_index,
            alpha,
            num_iterations,
            mass_history[-1],
            l1_changes[-1],
        )
        return WalkTrace(
            vector=v,
            source_index=int(source_index),
            alpha=float(alpha),
            num_iterations=int(num_iterations),
            initial=initial,
            mass_history=mass_history,
            l1_changes=l1_changes,
        )


def run_random_walk(
    transition: scipy.sparse.spmatrix,
    source_index: int,
    alpha: float,
    num_iterations: int,
    *,
    initial: str = "uniform",
    num_workers: int = 1,
) -> WalkTrace:
    """Convenience wrapper: build an engine over T and run it once."""
    engine = RandomWalkEngine(transition, num_workers=num_workers)
    return engine.run(source_index, alpha, num_iterations, initial=initial)
