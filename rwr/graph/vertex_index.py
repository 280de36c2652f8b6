"""Bidirectional mapping between external vertex identifiers and dense indices."""

from collections.abc import Hashable, Iterable

from rwr.errors import DimensionMismatchError, InvalidParameterError, UnknownVertexError


class VertexIndex:
    """Assigns dense indices [0, n) to identifiers in registration order.

    Registration order is the order of the input vertex list, not sorted or
    hashed order, so output ordering is reproducible. Once frozen the index
    can no longer grow; re-registering a known identifier is still allowed
    and returns its existing index.
    """

    def __init__(self) -> None:
        self._index: dict[Hashable, int] = {}
        self._identifiers: list[Hashable] = []
        self._frozen = False

    @classmethod
    def from_identifiers(cls, identifiers: Iterable[Hashable]) -> "VertexIndex":
        """Register identifiers in iteration order and freeze the result."""
        index = cls()
        for identifier in identifiers:
            index.register(identifier)
        return index.freeze()

    def register(self, identifier: Hashable) -> int:
        existing = self._index.get(identifier)
        if existing is not None:
            return existing
        if self._frozen:
            raise DimensionMismatchError(
                f"Cannot register {identifier!r}: index is frozen at "
                f"n={len(self._identifiers)}"
            )
        idx = len(self._identifiers)
        self._index[identifier] = idx
        self._identifiers.append(identifier)
        return idx

    def index_of(self, identifier: Hashable) -> int:
        try:
            return self._index[identifier]
        except KeyError:
            raise UnknownVertexError(identifier) from None

    def identifier_of(self, index: int) -> Hashable:
        if not 0 <= index < len(self._identifiers):
            raise InvalidParameterError(
                f"Vertex index {index} out of range [0, {len(self._identifiers)})"
            )
        return self._identifiers[index]

    def size(self) -> int:
        return len(self._identifiers)

    def freeze(self) -> "VertexIndex":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def identifiers(self) -> tuple[Hashable, ...]:
        """Identifiers in index order."""
        return tuple(self._identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"VertexIndex(n={len(self._identifiers)}, {state})"
