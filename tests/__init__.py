"""PYCUT test suite.

Folder taxonomy
- unit/      : Isolated, fast checks of a single module/class/function.
- e2e/       : The `pycut` command line, invoked through Click's CliRunner.
- fixtures/  : Sample batteries loaded by the end-to-end tests (no tests here).

General guidance
- Every test builds its own `Options`; nothing is shared between tests.
- Engine output goes to stdout through click; read it with `capsys`.
"""
