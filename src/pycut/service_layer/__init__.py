"""Service layer for PYCUT.

Implements the battery of registered tests and the loop that runs it. Calls
domain objects and the interfaces defined for tests.

Dependency rule: may import `pycut.domain` and `pycut.interfaces`, but not
`pycut.adapters` or `pycut.entrypoints`.
"""
