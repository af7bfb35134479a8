"""Question session use cases."""
