"""Shared fixtures: the four-vertex reference graph and its input files."""

from pathlib import Path

import pytest

from rwr.graph import GraphData, build_graph

REFERENCE_VERTICES = [12, 34, 56, 78]
REFERENCE_EDGES = [
    (12, 34),
    (12, 56),
    (34, 34),
    (34, 78),
    (56, 12),
    (56, 34),
    (56, 56),
    (56, 78),
    (78, 34),
]


@pytest.fixture
def reference_graph() -> GraphData:
    return build_graph(REFERENCE_VERTICES, REFERENCE_EDGES)


@pytest.fixture
def reference_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write the reference graph in the vertex/edge text formats."""
    vertices = tmp_path / "vertices.txt"
    edges = tmp_path / "edges.txt"
    vertices.write_text("\n".join(str(v) for v in REFERENCE_VERTICES) + "\n")
    edges.write_text("\n".join(f"{s},{t}" for s, t in REFERENCE_EDGES) + "\n")
    return vertices, edges


@pytest.fixture
def reference_vertices() -> list[int]:
    return list(REFERENCE_VERTICES)


@pytest.fixture
def reference_edges() -> list[tuple[int, int]]:
    return list(REFERENCE_EDGES)
