"""Tests for the identifier <-> dense index mapping."""

import pytest

from rwr.errors import DimensionMismatchError, InvalidParameterError, UnknownVertexError
from rwr.graph.vertex_index import VertexIndex


class TestRegister:
    """register assigns indices in order and is idempotent."""

    def test_indices_follow_registration_order(self) -> None:
        index = VertexIndex()
        assert [index.register(v) for v in (78, 12, 56)] == [0, 1, 2]
        assert index.identifiers == (78, 12, 56)

    def test_register_twice_returns_same_index(self) -> None:
        index = VertexIndex()
        first = index.register(34)
        index.register(12)
        assert index.register(34) == first
        assert index.size() == 2

    def test_from_identifiers_skips_duplicates(self) -> None:
        index = VertexIndex.from_identifiers([5, 3, 5, 9])
        assert len(index) == 3
        assert index.index_of(9) == 2

    def test_non_integer_identifiers(self) -> None:
        index = VertexIndex.from_identifiers(["b", "a"])
        assert index.index_of("a") == 1
        assert index.identifier_of(0) == "b"


class TestLookup:
    """index_of and identifier_of are exact inverses."""

    def test_round_trip(self) -> None:
        ids = [12, 34, 56, 78]
        index = VertexIndex.from_identifiers(ids)
        for i, identifier in enumerate(ids):
            assert index.index_of(identifier) == i
            assert index.identifier_of(i) == identifier

    def test_unknown_identifier_raises(self) -> None:
        index = VertexIndex.from_identifiers([1, 2])
        with pytest.raises(UnknownVertexError) as exc_info:
            index.index_of(3)
        assert exc_info.value.identifier == 3

    def test_unknown_vertex_is_lookup_error(self) -> None:
        index = VertexIndex()
        with pytest.raises(LookupError):
            index.index_of("missing")

    @pytest.mark.parametrize("bad", [-1, 2])
    def test_out_of_range_index_raises(self, bad: int) -> None:
        index = VertexIndex.from_identifiers([1, 2])
        with pytest.raises(InvalidParameterError):
            index.identifier_of(bad)

    def test_contains(self) -> None:
        index = VertexIndex.from_identifiers([1, 2])
        assert 1 in index
        assert 3 not in index


class TestFreeze:
    """A frozen index cannot grow."""

    def test_from_identifiers_is_frozen(self) -> None:
        assert VertexIndex.from_identifiers([1]).frozen

    def test_new_identifier_after_freeze_raises(self) -> None:
        index = VertexIndex.from_identifiers([1, 2])
        with pytest.raises(DimensionMismatchError):
            index.register(3)
        assert index.size() == 2

    def test_known_identifier_after_freeze_ok(self) -> None:
        index = VertexIndex.from_identifiers([1, 2])
        assert index.register(2) == 1
