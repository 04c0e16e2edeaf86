"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real terminal I/O; use `ScriptedPrompter` for interactive tests.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
