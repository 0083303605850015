"""HTTP adapter for tirelife."""
