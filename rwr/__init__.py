"""Random Walk with Restart over directed edge-list graphs."""
