"""Console output helpers."""
