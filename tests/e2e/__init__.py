"""End-to-end tests of the `pycut` command line."""
