"""Command-line interface for tirelife."""
