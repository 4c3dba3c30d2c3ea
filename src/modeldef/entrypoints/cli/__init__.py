"""Command-line interface for modeldef."""
