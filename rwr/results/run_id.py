"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from rwr.config.run import RunConfig


def generate_run_id(config: RunConfig) -> str:
    """Generate a scannable run ID from config parameters.

    Format: src{source}_a{alpha}_it{num_iterations}_{YYYYMMDD}_{HHMMSS}
    Example: src56_a0.25_it2_20261018_143012

    The slug encodes the walk parameters so run directories are identifiable
    at a glance in file listings without opening result.json.
    """
    ts = datetime.now(timezone.utc)
    return (
        f"src{config.source_vertex}"
        f"_a{config.walk.restart_probability:g}"
        f"_it{config.walk.num_iterations}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
