"""Walk module: restart-walk engine, result types, and steady-state computation."""

from rwr.walk.engine import (
    RandomWalkEngine,
    initial_vector,
    mass_loss_bound,
    restart_vector,
    run_random_walk,
    validate_walk_parameters,
)
from rwr.walk.steady_state import compute_steady_state
from rwr.walk.types import SteadyState, WalkTrace

__all__ = [
    "RandomWalkEngine",
    "SteadyState",
    "WalkTrace",
    "compute_steady_state",
    "initial_vector",
    "mass_loss_bound",
    "restart_vector",
    "run_random_walk",
    "validate_walk_parameters",
]
