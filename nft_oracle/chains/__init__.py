"""Chain client implementations."""
