"""Default configuration: single source of truth for default run parameters."""

from rwr.config.run import RunConfig

# All-default values: alpha=0.15, 10 iterations, uniform start, one worker,
# vertices.txt / edges.txt with comma-separated edges.
DEFAULT_CONFIG = RunConfig()
