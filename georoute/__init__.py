"""Shortest-path routing with range-based congestion updates, an HTTP server, a CLI and benchmarks."""

__version__ = "0.1.0"