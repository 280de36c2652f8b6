"""Run configuration system with frozen, hashable, serializable dataclasses."""

from rwr.config.run import (
    INITIAL_DISTRIBUTIONS,
    GraphInputConfig,
    RunConfig,
    WalkConfig,
)
from rwr.config.defaults import DEFAULT_CONFIG
from rwr.config.hashing import config_hash, graph_config_hash, full_config_hash
from rwr.config.serialization import config_to_json, config_from_json

__all__ = [
    "INITIAL_DISTRIBUTIONS",
    "GraphInputConfig",
    "RunConfig",
    "WalkConfig",
    "DEFAULT_CONFIG",
    "config_hash",
    "graph_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
]
