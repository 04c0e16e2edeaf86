"""Unit tests for the battery and the execution loop."""
