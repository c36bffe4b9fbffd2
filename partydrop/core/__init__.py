"""Core utilities: security primitives, errors and request dependencies."""
