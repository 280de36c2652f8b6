"""Tests for row normalization and the dangling-row policy."""

import numpy as np
import pytest
import scipy.sparse

from rwr.errors import DimensionMismatchError, InvalidParameterError
from rwr.graph.transition import (
    build_transition_matrix,
    dangling_vertices,
    out_degrees,
    validate_transition_matrix,
)


def _random_multigraph(n: int = 40, n_edges: int = 200, seed: int = 7) -> scipy.sparse.csr_matrix:
    """Random adjacency counts with duplicates, self-loops, and some empty rows."""
    rng = np.random.default_rng(seed)
    rows = rng.integers(0, n - 5, size=n_edges)  # last 5 rows stay dangling
    cols = rng.integers(0, n, size=n_edges)
    data = np.ones(n_edges)
    return scipy.sparse.coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()


class TestReferenceTransition:
    """The four-vertex reference graph normalizes to the documented rows."""

    def test_reference_rows(self, reference_graph) -> None:
        expected = np.array(
            [
                [0.0, 0.5, 0.5, 0.0],
                [0.0, 0.5, 0.0, 0.5],
                [0.25, 0.25, 0.25, 0.25],
                [0.0, 1.0, 0.0, 0.0],
            ]
        )
        np.testing.assert_allclose(
            reference_graph.transition.toarray(), expected, atol=1e-12
        )

    def test_scaled_transpose_matches_propagation_matrix(self, reference_graph) -> None:
        """(1 - alpha) * T^T with alpha = 0.25 is the per-step propagation."""
        expected = np.array(
            [
                [0.0, 0.0, 0.1875, 0.0],
                [0.375, 0.375, 0.1875, 0.75],
                [0.375, 0.0, 0.1875, 0.0],
                [0.0, 0.375, 0.1875, 0.0],
            ]
        )
        scaled = 0.75 * reference_graph.transition.T.toarray()
        np.testing.assert_allclose(scaled, expected, atol=1e-12)


class TestRowStochastic:
    """Every nonzero row sums to 1."""

    def test_random_multigraph_rows_sum_to_one(self) -> None:
        transition = build_transition_matrix(_random_multigraph())
        row_sums = np.asarray(transition.sum(axis=1)).ravel()
        nonzero = row_sums > 0
        assert nonzero.sum() > 0
        np.testing.assert_allclose(row_sums[nonzero], 1.0, atol=1e-9)
        assert validate_transition_matrix(transition) == []

    def test_duplicate_edges_weight_probability(self) -> None:
        adjacency = scipy.sparse.csr_matrix(
            np.array([[0, 2, 1], [0, 0, 0], [0, 0, 0]], dtype=np.float64)
        )
        transition = build_transition_matrix(adjacency)
        assert transition[0, 1] == pytest.approx(2 / 3)
        assert transition[0, 2] == pytest.approx(1 / 3)

    def test_self_loop_only_row(self) -> None:
        adjacency = scipy.sparse.csr_matrix(np.array([[3.0]]))
        assert build_transition_matrix(adjacency).toarray().tolist() == [[1.0]]


class TestDanglingRows:
    """Rows with zero out-degree stay all-zero."""

    def test_dangling_row_is_zero(self) -> None:
        adjacency = _random_multigraph()
        transition = build_transition_matrix(adjacency)
        dangling = dangling_vertices(adjacency)
        assert len(dangling) >= 5
        for row in dangling:
            assert transition[row].nnz == 0

    def test_dangling_matches_out_degree(self) -> None:
        adjacency = _random_multigraph()
        np.testing.assert_array_equal(
            dangling_vertices(adjacency), np.flatnonzero(out_degrees(adjacency) == 0)
        )

    def test_all_dangling(self) -> None:
        transition = build_transition_matrix(scipy.sparse.csr_matrix((3, 3)))
        assert transition.nnz == 0
        assert validate_transition_matrix(transition) == []


class TestInvalidInput:
    """Malformed adjacency matrices are rejected."""

    def test_non_square_raises(self) -> None:
        with pytest.raises(DimensionMismatchError):
            build_transition_matrix(scipy.sparse.csr_matrix((2, 3)))

    def test_negative_entries_raise(self) -> None:
        adjacency = scipy.sparse.csr_matrix(np.array([[0.0, -1.0], [1.0, 0.0]]))
        with pytest.raises(InvalidParameterError):
            build_transition_matrix(adjacency)


class TestValidateTransitionMatrix:
    """validate_transition_matrix reports each violated property."""

    def test_row_not_summing_to_one(self) -> None:
        transition = scipy.sparse.csr_matrix(np.array([[0.5, 0.4], [0.0, 0.0]]))
        errors = validate_transition_matrix(transition)
        assert len(errors) == 1
        assert "Row 0" in errors[0]

    def test_negative_probability(self) -> None:
        transition = scipy.sparse.csr_matrix(np.array([[1.5, -0.5], [0.0, 1.0]]))
        errors = validate_transition_matrix(transition)
        assert any("Negative" in e for e in errors)

    def test_non_square(self) -> None:
        errors = validate_transition_matrix(scipy.sparse.csr_matrix((2, 3)))
        assert any("not square" in e for e in errors)

    def test_tolerance_absorbs_rounding(self) -> None:
        transition = scipy.sparse.csr_matrix(np.array([[1 / 3, 1 / 3, 1 / 3]] * 3))
        assert validate_transition_matrix(transition) == []
