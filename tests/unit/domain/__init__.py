"""Unit tests for the domain layer."""
