"""Adapters: document store, grading oracle, identity and the HTTP API."""
