"""Exception hierarchy shared by the graph builders and the walk engine.

Every error is raised synchronously from the call that detects it. None of
them is retried: the computation is deterministic, so a failure always means
bad input or a broken invariant.
"""


class RandomWalkError(Exception):
    """Base class for all errors raised by this package."""


class UnknownVertexError(RandomWalkError, LookupError):
    """Raised when an edge or the source refers to an unregistered identifier."""

    def __init__(self, identifier: object) -> None:
        super().__init__(f"Unknown vertex identifier: {identifier!r}")
        self.identifier = identifier


class InvalidParameterError(RandomWalkError, ValueError):
    """Raised when a caller-supplied parameter violates a precondition."""


class DimensionMismatchError(RandomWalkError):
    """Raised when matrix shapes and the vertex index size diverge."""


class InputFormatError(RandomWalkError, ValueError):
    """Raised when a vertex or edge file line cannot be parsed."""
