"""Text readers for the vertex list and the edge list.

Vertex file: one identifier per line. Edge file: "source<delimiter>target"
per line. Blank lines and lines starting with '#' are skipped in both.
Identifiers are parsed with `parse` (int by default, matching 64-bit vertex
ids in the input files).
"""

import logging
from collections.abc import Callable, Hashable, Iterator
from pathlib import Path

from rwr.errors import InputFormatError

log = logging.getLogger(__name__)


def _content_lines(path: Path) -> Iterator[tuple[int, str]]:
    with open(path) as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            yield lineno, line


def _parse_token(
    token: str, parse: Callable[[str], Hashable], path: Path, lineno: int
) -> Hashable:
    try:
        return parse(token.strip())
    except ValueError as e:
        raise InputFormatError(
            f"{path}:{lineno}: cannot parse vertex identifier {token!r}: {e}"
        ) from e


def read_vertices(
    path: str | Path, parse: Callable[[str], Hashable] = int
) -> list[Hashable]:
    """Read vertex identifiers in file order.

    Args:
        path: Vertex list file.
        parse: Converts one token into an identifier.

    Returns:
        Identifiers in the order they appear (duplicates kept; the vertex
        index registers each one once).

    Raises:
        InputFormatError: If a line holds anything but a single identifier.
    """
    path = Path(path)
    identifiers: list[Hashable] = []
    for lineno, line in _content_lines(path):
        if len(line.split()) != 1:
            raise InputFormatError(
                f"{path}:{lineno}: expected one vertex identifier, got {line!r}"
            )
        identifiers.append(_parse_token(line, parse, path, lineno))
    log.info("Read %d vertices from %s", len(identifiers), path)
    return identifiers


def iter_edges(
    path: str | Path,
    delimiter: str = ",",
    parse: Callable[[str], Hashable] = int,
) -> Iterator[tuple[Hashable, Hashable]]:
    """Lazily yield (source, target) identifier pairs from an edge file.

    Raises:
        InputFormatError: If a line does not split into exactly two fields.
    """
    path = Path(path)
    for lineno, line in _content_lines(path):
        fields = line.split(delimiter)
        if len(fields) != 2:
            raise InputFormatError(
                f"{path}:{lineno}: expected 'source{delimiter}target', got {line!r}"
            )
        yield (
            _parse_token(fields[0], parse, path, lineno),
            _parse_token(fields[1], parse, path, lineno),
        )
