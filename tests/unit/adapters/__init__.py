"""Unit tests for the prompters."""
