"""Routing: pattern compilation, matching, naming and dispatch."""
