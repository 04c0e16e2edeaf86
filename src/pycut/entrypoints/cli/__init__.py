"""Command-line interface for PYCUT."""
