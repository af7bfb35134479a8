"""Application layer: ports, the session tracker and the evaluation services."""
