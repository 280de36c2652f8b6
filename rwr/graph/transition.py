"""Row normalization of the adjacency matrix into a transition matrix.

Dangling policy: a vertex with no outgoing edges keeps an all-zero row. A
walker standing on it vanishes instead of teleporting, so T^T v loses that
vertex's mass; the engine's restart mixing reinjects alpha at the source each
step. Redistributing dangling mass uniformly is not done here.
"""

import logging

import numpy as np
import scipy.sparse

from rwr.errors import DimensionMismatchError, InvalidParameterError

log = logging.getLogger(__name__)

ROW_SUM_TOLERANCE = 1e-9


def out_degrees(adjacency: scipy.sparse.spmatrix) -> np.ndarray:
    """Row sums of the adjacency matrix as a flat float64 array."""
    return np.asarray(adjacency.sum(axis=1), dtype=np.float64).ravel()


def dangling_vertices(adjacency: scipy.sparse.spmatrix) -> np.ndarray:
    """Indices of rows with zero out-degree."""
    return np.flatnonzero(out_degrees(adjacency) == 0)


def build_transition_matrix(
    adjacency: scipy.sparse.spmatrix,
) -> scipy.sparse.csr_matrix:
    """Row-normalize A into a row-stochastic transition matrix.

    T[i, j] = A[i, j] / outdeg(i) when outdeg(i) > 0. Rows with zero
    out-degree stay all-zero.

    Args:
        adjacency: Square non-negative adjacency count matrix (n x n).

    Returns:
        Transition matrix T as float64 CSR.

    Raises:
        DimensionMismatchError: If the matrix is not square.
        InvalidParameterError: If the matrix has negative entries.
    """
    n_rows, n_cols = adjacency.shape
    if n_rows != n_cols:
        raise DimensionMismatchError(
            f"Adjacency matrix must be square, got shape {adjacency.shape}"
        )

    adjacency = scipy.sparse.csr_matrix(adjacency, dtype=np.float64)
    if adjacency.nnz > 0 and adjacency.data.min() < 0:
        raise InvalidParameterError("Adjacency matrix has negative entries")

    degrees = out_degrees(adjacency)
    inv_degrees = np.zeros_like(degrees)
    nonzero = degrees > 0
    inv_degrees[nonzero] = 1.0 / degrees[nonzero]

    # D^-1 A scales each row by 1/outdeg; zero rows stay zero
    transition = scipy.sparse.diags(inv_degrees, format="csr") @ adjacency
    transition = scipy.sparse.csr_matrix(transition)
    transition.eliminate_zeros()
    transition.sort_indices()

    n_dangling = int((~nonzero).sum())
    log.info(
        "Transition matrix built: n=%d, nnz=%d, dangling=%d",
        n_rows,
        transition.nnz,
        n_dangling,
    )
    return transition


def validate_transition_matrix(
    transition: scipy.sparse.spmatrix, tol: float = ROW_SUM_TOLERANCE
) -> list[str]:
    """Check that T is square, non-negative, and row-stochastic on nonzero rows.

    Args:
        transition: Transition matrix to check.
        tol: Absolute tolerance on each nonzero row's sum.

    Returns:
        List of error strings (empty = valid matrix).
    """
    errors: list[str] = []

    n_rows, n_cols = transition.shape
    if n_rows != n_cols:
        errors.append(f"Transition matrix is not square: shape {transition.shape}")
        return errors

    transition = scipy.sparse.csr_matrix(transition, copy=True)
    # Explicitly stored zeros do not make a row nonzero
    transition.eliminate_zeros()
    if transition.nnz > 0 and transition.data.min() < 0:
        errors.append(
            f"Negative transition probability: min = {transition.data.min()}"
        )

    row_sums = np.asarray(transition.sum(axis=1)).ravel()
    row_nnz = np.diff(transition.indptr)
    bad_rows = np.flatnonzero(
        (row_nnz > 0) & (np.abs(row_sums - 1.0) > tol)
    )
    for row in bad_rows[:10]:
        errors.append(f"Row {row} sums to {row_sums[row]!r}, expected 1.0")
    if len(bad_rows) > 10:
        errors.append(f"... and {len(bad_rows) - 10} more rows off by > {tol}")

    return errors
