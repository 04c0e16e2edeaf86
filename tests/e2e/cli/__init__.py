"""End-to-end tests of `pycut run`."""
