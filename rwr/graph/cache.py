"""Graph caching by config hash and input digest with sparse matrix storage.

Caches the adjacency and transition matrices to disk so repeated runs over
the same vertex and edge files (for example with different source vertices
or restart probabilities) skip parsing and normalization.
"""

import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import scipy.sparse

from rwr.config.run import RunConfig
from rwr.config.hashing import graph_config_hash
from rwr.graph.builder import build_graph, check_dimensions, check_transition
from rwr.graph.transition import out_degrees
from rwr.graph.types import GraphData
from rwr.graph.vertex_index import VertexIndex
from rwr.io.readers import iter_edges, read_vertices

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/graphs")

REQUIRED_FILES = ("adjacency.npz", "transition.npz", "metadata.json")


def input_digest(config: RunConfig) -> str:
    """SHA-256 over the vertex and edge file contents (first 12 hex chars)."""
    h = hashlib.sha256()
    for path in (config.graph.vertices_path, config.graph.edges_path):
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(1 << 20), b""):
                h.update(chunk)
        h.update(b"\0")
    return h.hexdigest()[:12]


def graph_cache_key(config: RunConfig) -> str:
    """Compute cache key for a graph input.

    Key = graph_config_hash + input file digest. Same paths and delimiter
    with unchanged file contents = cache hit. Walk parameters, source vertex,
    description and tags don't affect the key.

    Args:
        config: Full run configuration.

    Returns:
        Cache key string like "a1b2c3d4e5f6g7h8_0123456789ab".
    """
    return f"{graph_config_hash(config)}_{input_digest(config)}"


def _cache_path(config: RunConfig, cache_dir: Path = DEFAULT_CACHE_DIR) -> Path:
    """Compute the directory path for a cached graph."""
    return cache_dir / graph_cache_key(config)


def save_graph(
    graph: GraphData,
    config: RunConfig,
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> Path:
    """Save a built graph to the cache.

    Stores:
    - adjacency.npz: edge count matrix
    - transition.npz: row-normalized matrix
    - metadata.json: n, identifiers in index order, edge count, provenance

    Args:
        graph: The built graph.
        config: Run configuration.
        cache_dir: Root cache directory.

    Returns:
        Path to the cache directory for this graph.
    """
    cache_path = _cache_path(config, cache_dir)
    cache_path.mkdir(parents=True, exist_ok=True)

    scipy.sparse.save_npz(str(cache_path / "adjacency.npz"), graph.adjacency)
    scipy.sparse.save_npz(str(cache_path / "transition.npz"), graph.transition)

    metadata = {
        "n": graph.n,
        "num_edges": graph.num_edges,
        "identifiers": list(graph.index.identifiers),
        "config_hash": graph_config_hash(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    with open(cache_path / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)

    log.info("Graph cached at %s", cache_path)
    return cache_path


def load_graph(
    config: RunConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> GraphData | None:
    """Load a cached graph if it exists.

    Args:
        config: Run configuration.
        cache_dir: Root cache directory.

    Returns:
        GraphData on cache hit, None on cache miss.

    Raises:
        DimensionMismatchError: If the cached matrices disagree with the
            cached identifier list, or the cached transition matrix is not
            row-stochastic.
    """
    cache_path = _cache_path(config, cache_dir)

    for fname in REQUIRED_FILES:
        if not (cache_path / fname).exists():
            return None

    adjacency = scipy.sparse.load_npz(str(cache_path / "adjacency.npz")).tocsr()
    transition = scipy.sparse.load_npz(str(cache_path / "transition.npz")).tocsr()

    with open(cache_path / "metadata.json") as f:
        metadata = json.load(f)

    graph = GraphData(
        index=VertexIndex.from_identifiers(metadata["identifiers"]),
        adjacency=adjacency,
        transition=transition,
        out_degrees=out_degrees(adjacency),
        n=metadata["n"],
        num_edges=metadata["num_edges"],
    )
    check_dimensions(graph)
    check_transition(graph.transition)

    log.info("Graph loaded from cache: %s", cache_path)
    return graph


def build_graph_from_files(config: RunConfig) -> GraphData:
    """Read the configured vertex and edge files and build the graph."""
    identifiers = read_vertices(config.graph.vertices_path)
    edges = iter_edges(config.graph.edges_path, delimiter=config.graph.delimiter)
    return build_graph(identifiers, edges)


def generate_or_load_graph(
    config: RunConfig, cache_dir: Path | None = None
) -> GraphData:
    """Build a graph or load it from cache if available.

    On cache miss: reads the input files, builds the matrices, saves to cache.
    On cache hit: loads from disk without re-reading the edge list.
    With config.use_cache False the cache is neither read nor written.

    Args:
        config: Full run configuration.
        cache_dir: Root cache directory (defaults to config.cache_dir).

    Returns:
        GraphData for the configured input.
    """
    if not config.use_cache:
        return build_graph_from_files(config)

    cache_dir = Path(config.cache_dir) if cache_dir is None else cache_dir
    key = graph_cache_key(config)

    cached = load_graph(config, cache_dir)
    if cached is not None:
        log.info("Cache hit for %s", key)
        return cached

    log.info("Cache miss for %s, building...", key)
    graph = build_graph_from_files(config)
    save_graph(graph, config, cache_dir)
    return graph
