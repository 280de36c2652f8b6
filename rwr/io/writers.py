"""Tab-separated output of the steady-state vector."""

import logging
from collections.abc import Callable, Hashable, Mapping
from pathlib import Path

from rwr.errors import InputFormatError

log = logging.getLogger(__name__)

STEADY_STATE_FILENAME = "steady_state.tsv"


def write_steady_state(
    probabilities: Mapping[Hashable, float], path: str | Path
) -> Path:
    """Write one "identifier<TAB>probability" line per vertex.

    Lines follow the mapping's iteration order (index order for
    SteadyState.as_mapping()). Probabilities are written with repr() so
    they round-trip exactly.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for identifier, value in probabilities.items():
            f.write(f"{identifier}\t{float(value)!r}\n")
    log.info("Steady state (%d vertices) written to %s", len(probabilities), path)
    return path


def read_steady_state(
    path: str | Path, parse: Callable[[str], Hashable] = int
) -> dict[Hashable, float]:
    """Read a file written by write_steady_state back into a mapping."""
    path = Path(path)
    result: dict[Hashable, float] = {}
    with open(path) as f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\n")
            if not line:
                continue
            tokens = line.split("\t")
            if len(tokens) != 2:
                raise InputFormatError(
                    f"{path}:{lineno}: expected 'identifier<TAB>probability', "
                    f"got {line!r}"
                )
            try:
                result[parse(tokens[0])] = float(tokens[1])
            except ValueError as e:
                raise InputFormatError(f"{path}:{lineno}: {e}") from e
    return result
