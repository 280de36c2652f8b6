#!/usr/bin/env python3
"""Entry point for computing a random walk with restart steady state.

Chains all pipeline stages into a single executable command:
graph construction (or cache load) -> random walk -> output.

Usage:
    python run_walk.py --config config.json
    python run_walk.py --vertices vertices.txt --edges edges.txt --source 56
    python run_walk.py --config config.json --alpha 0.25 --iterations 2 --verbose
    python run_walk.py --config config.json --dry-run
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

import dacite

from rwr.config import (
    DEFAULT_CONFIG,
    RunConfig,
    config_from_json,
    config_hash,
    config_to_json,
    full_config_hash,
)
from rwr.errors import InvalidParameterError
from rwr.results import generate_run_id

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(config: RunConfig) -> Path:
    """Execute the full pipeline for one run.

    Args:
        config: Run configuration with a source vertex set.

    Returns:
        Path to the output directory.
    """
    from rwr.graph import generate_or_load_graph
    from rwr.io import STEADY_STATE_FILENAME, write_steady_state
    from rwr.results import get_git_hash, write_result
    from rwr.walk import compute_steady_state

    if config.source_vertex is None:
        raise InvalidParameterError(
            "source_vertex must be set in the config or with --source"
        )

    run_id = generate_run_id(config)
    output_dir = Path(config.output_dir) / run_id
    log.info("Run ID: %s", run_id)
    log.info("Git hash: %s", get_git_hash())

    with stage_timer("Graph Construction"):
        graph = generate_or_load_graph(config)
        log.info(
            "Graph: n=%d, edges=%d, dangling=%d",
            graph.n, graph.num_edges, len(graph.dangling),
        )

    with stage_timer("Random Walk"):
        steady_state = compute_steady_state(graph, config.source_vertex, config.walk)
        trace = steady_state.trace

    with stage_timer("Write Output"):
        mapping = steady_state.as_mapping()
        write_steady_state(mapping, output_dir / STEADY_STATE_FILENAME)
        write_result(
            config,
            metrics={
                "scalars": {
                    "n": graph.n,
                    "num_edges": graph.num_edges,
                    "num_dangling": int(len(graph.dangling)),
                    "source_index": trace.source_index,
                    "final_mass": trace.mass,
                    "last_l1_change": float(trace.l1_changes[-1]),
                },
                "curves": {
                    "mass_history": trace.mass_history.tolist(),
                    "l1_changes": trace.l1_changes.tolist(),
                },
            },
            steady_state=mapping,
            results_dir=config.output_dir,
            run_id=run_id,
        )
        (output_dir / "config.json").write_text(config_to_json(config))

    for identifier, value in steady_state.top(5):
        print(f"  {identifier}\t{value:.6f}")
    print(f"\nOutput: {output_dir}/")
    return output_dir


def apply_overrides(config: RunConfig, args: argparse.Namespace) -> RunConfig:
    """Overlay command-line values onto a loaded config.

    Raises:
        InvalidParameterError: If an override fails config validation.
    """
    graph = config.graph
    if args.vertices is not None:
        graph = replace(graph, vertices_path=args.vertices)
    if args.edges is not None:
        graph = replace(graph, edges_path=args.edges)
    if args.delimiter is not None:
        graph = replace(graph, delimiter=args.delimiter)

    walk = config.walk
    if args.alpha is not None:
        walk = replace(walk, restart_probability=args.alpha)
    if args.iterations is not None:
        walk = replace(walk, num_iterations=args.iterations)
    if args.initial is not None:
        walk = replace(walk, initial=args.initial)
    if args.workers is not None:
        walk = replace(walk, num_workers=args.workers)

    config = replace(config, graph=graph, walk=walk)
    if args.source is not None:
        config = replace(config, source_vertex=args.source)
    if args.output is not None:
        config = replace(config, output_dir=args.output)
    if args.no_cache:
        config = replace(config, use_cache=False)
    return config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Random walk with restart steady state over an edge list"
    )
    parser.add_argument("--config", help="Path to run config JSON file")
    parser.add_argument("--vertices", help="Vertex list file")
    parser.add_argument("--edges", help="Edge list file")
    parser.add_argument("--delimiter", help="Edge field delimiter (default ',')")
    parser.add_argument("--source", type=int, help="Source vertex identifier")
    parser.add_argument(
        "--alpha", type=float, help="Restart probability, strictly in (0, 1)"
    )
    parser.add_argument("--iterations", type=int, help="Number of iterations")
    parser.add_argument(
        "--initial",
        choices=["uniform", "restart"],
        help="Initial distribution (default uniform)",
    )
    parser.add_argument("--workers", type=int, help="Threads per iteration")
    parser.add_argument("--output", help="Base output directory")
    parser.add_argument(
        "--no-cache", action="store_true", help="Skip the graph matrix cache"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the plan and exit"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable DEBUG logging"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = DEFAULT_CONFIG
    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        try:
            config = config_from_json(config_path.read_text())
        except (ValueError, dacite.DaciteError) as e:
            print(f"Error: invalid config file {config_path}: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        config = apply_overrides(config, args)
    except InvalidParameterError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Config hash:   {full_config_hash(config)}")
    print(f"Graph hash:    {config_hash(config.graph)}")
    print()
    print(f"Input:    vertices={config.graph.vertices_path}, "
          f"edges={config.graph.edges_path}, delimiter={config.graph.delimiter!r}")
    print(f"Walk:     source={config.source_vertex}, "
          f"alpha={config.walk.restart_probability}, "
          f"iterations={config.walk.num_iterations}, "
          f"initial={config.walk.initial}, workers={config.walk.num_workers}")

    if args.dry_run:
        print("\nPipeline plan:")
        print(f"  1. Graph construction (cache={'on' if config.use_cache else 'off'}"
              f", dir={config.cache_dir})")
        print(f"  2. Random walk: {config.walk.num_iterations} iterations")
        print(f"  3. Output under {config.output_dir}/<run_id>/")
        print("     - steady_state.tsv")
        print("     - result.json")
        print("     - config.json (copy)")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config)
    except Exception:
        log.exception("Pipeline failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
