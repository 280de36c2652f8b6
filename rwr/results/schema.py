"""Result schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields
and types before writing result.json files.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rwr.config.run import RunConfig
from rwr.config.hashing import full_config_hash, graph_config_hash
from rwr.results.provenance import get_git_hash
from rwr.results.run_id import generate_run_id

log = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "metrics",
}

REQUIRED_SCALARS = {"n", "num_edges", "num_dangling", "final_mass"}


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the project schema.

    Returns a list of error strings. An empty list means the result is valid.

    Checks:
    - All required top-level fields are present
    - schema_version is a string, tags a list, config a dict
    - timestamp parses as ISO 8601
    - metrics.scalars holds the graph and walk summary values
    - steady_state, when present, has one entry per vertex
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")

    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    scalars: dict[str, Any] = {}
    if "metrics" in result:
        if not isinstance(result["metrics"], dict):
            errors.append("metrics must be a dict")
        elif "scalars" not in result["metrics"]:
            errors.append("metrics.scalars is required")
        elif not isinstance(result["metrics"]["scalars"], dict):
            errors.append("metrics.scalars must be a dict")
        else:
            scalars = result["metrics"]["scalars"]
            missing_scalars = REQUIRED_SCALARS - set(scalars.keys())
            if missing_scalars:
                errors.append(
                    f"metrics.scalars missing fields: {sorted(missing_scalars)}"
                )

    steady_state = result.get("steady_state")
    if steady_state is not None:
        if not isinstance(steady_state, dict):
            errors.append("steady_state must be a dict")
        elif "n" in scalars and len(steady_state) != scalars["n"]:
            errors.append(
                f"steady_state length ({len(steady_state)}) != "
                f"metrics.scalars.n ({scalars['n']})"
            )

    return errors


def write_result(
    config: RunConfig,
    metrics: dict[str, Any],
    steady_state: dict[str, float] | None = None,
    metadata: dict[str, Any] | None = None,
    results_dir: str | Path = "results",
    run_id: str | None = None,
) -> Path:
    """Write result.json into results/{run_id}/.

    Args:
        config: The run configuration.
        metrics: Metrics dict (must include 'scalars' key).
        steady_state: Optional identifier -> probability mapping. Keys are
            stringified since JSON object keys must be strings.
        metadata: Optional additional metadata to merge into the metadata block.
        results_dir: Base directory for result output.
        run_id: Reuse an existing run ID instead of generating a new one.

    Returns:
        Path to the written result.json.

    Raises:
        ValueError: If the assembled result fails validation.
    """
    run_id = run_id or generate_run_id(config)
    out_dir = Path(results_dir) / run_id
    out_dir.mkdir(parents=True, exist_ok=True)

    result: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "metrics": metrics,
        "metadata": {
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "graph_config_hash": graph_config_hash(config),
            **(metadata or {}),
        },
    }
    if steady_state is not None:
        result["steady_state"] = {str(k): float(v) for k, v in steady_state.items()}

    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    result_path = out_dir / "result.json"
    with open(result_path, "w") as f:
        json.dump(result, f, indent=2)

    log.info("Result written to %s", result_path)
    return result_path


def load_result(result_path: str | Path) -> dict[str, Any]:
    """Load and validate a result.json file.

    Raises:
        ValueError: If the loaded result fails validation.
    """
    with open(result_path) as f:
        result = json.load(f)

    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Invalid result file {result_path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return result
