"""Result schema validation, writing, run ID generation, and provenance."""

from rwr.results.provenance import get_git_hash
from rwr.results.run_id import generate_run_id
from rwr.results.schema import load_result, validate_result, write_result

__all__ = [
    "generate_run_id",
    "get_git_hash",
    "load_result",
    "validate_result",
    "write_result",
]
