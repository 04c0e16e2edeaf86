"""Interfaces (application boundary) for PYCUT.

Defines the framework-free contracts shared by the domain, the service layer
and adapters: the interactive prompter and the unit-test case.

Dependency rule: may import `pycut.domain` for types only; do not import from
`pycut.adapters`, `pycut.service_layer` or `pycut.entrypoints`.
"""
