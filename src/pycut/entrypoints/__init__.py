"""Entrypoints (inbound adapters) for PYCUT.

Expose the engine to the outside world: the options parser and the `pycut`
command line. Parse and validate inputs, call the service layer, and present
results.
"""
