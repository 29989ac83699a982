"""Shell and PATH operations."""
