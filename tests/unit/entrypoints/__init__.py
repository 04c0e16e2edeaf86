"""Unit tests for the options parser and CLI helpers."""
