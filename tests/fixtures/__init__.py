"""Sample batteries for the end-to-end tests."""
