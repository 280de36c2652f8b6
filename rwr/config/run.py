"""Run configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field

from rwr.errors import InvalidParameterError

INITIAL_DISTRIBUTIONS = ("uniform", "restart")


@dataclass(frozen=True, slots=True)
class GraphInputConfig:
    """Where the vertex and edge lists live and how edge lines are split."""

    vertices_path: str = "vertices.txt"  # one identifier per line
    edges_path: str = "edges.txt"  # "source<delimiter>target" per line
    delimiter: str = ","

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise InvalidParameterError("delimiter must be a non-empty string")


@dataclass(frozen=True, slots=True)
class WalkConfig:
    """Random walk with restart parameters."""

    restart_probability: float = 0.15  # alpha, mass reinjected at the source
    num_iterations: int = 10
    initial: str = "uniform"  # "uniform" or "restart"
    num_workers: int = 1  # >1 partitions each step across a thread pool

    def __post_init__(self) -> None:
        if not 0.0 < self.restart_probability < 1.0:
            raise InvalidParameterError(
                f"restart_probability must be strictly between 0 and 1, "
                f"got {self.restart_probability}"
            )
        if self.num_iterations < 1:
            raise InvalidParameterError(
                f"num_iterations must be >= 1, got {self.num_iterations}"
            )
        if self.initial not in INITIAL_DISTRIBUTIONS:
            raise InvalidParameterError(
                f"initial must be one of {INITIAL_DISTRIBUTIONS}, "
                f"got {self.initial!r}"
            )
        if self.num_workers < 1:
            raise InvalidParameterError(
                f"num_workers must be >= 1, got {self.num_workers}"
            )


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level run configuration composing the input and walk configs.

    The source vertex is an external identifier, resolved through the vertex
    index when the run starts. It may be left unset in a config file and
    supplied on the command line instead.
    """

    graph: GraphInputConfig = field(default_factory=GraphInputConfig)
    walk: WalkConfig = field(default_factory=WalkConfig)
    source_vertex: int | None = None
    output_dir: str = "results"
    cache_dir: str = ".cache/graphs"
    use_cache: bool = True
    description: str = ""
    tags: tuple[str, ...] = ()
