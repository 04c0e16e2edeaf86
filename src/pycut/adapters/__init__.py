"""Adapters (infrastructure) for PYCUT.

Provide concrete implementations of the interfaces, such as the terminal
prompter used by interactive tests.

Dependency rule: may import `pycut.domain` and `pycut.interfaces`; the domain
must not import this package.
"""
