"""Thread-safe router combining a graph with live congestion factors."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from georoute.dijkstra import DijkstraRouter
from georoute.graph import Graph
from georoute.segment_tree import SegmentTree
from georoute.types import RouteComputation


def _as_index(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Router.from_json field '{field}' must be a non-negative integer")
    return value


def _as_number(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Router.from_json field '{field}' must be a number")
    return float(value)


class Router:
    """Answers route queries and applies congestion updates under a lock."""

    def __init__(self, graph: Graph, segment_tree: SegmentTree | None = None) -> None:
        self._graph = graph
        self._congestion = segment_tree if segment_tree is not None else SegmentTree(graph.edge_count())
        self._lock = threading.Lock()

    def apply_congestion_update(self, edge_start: int, edge_end: int, factor: float) -> None:
        """Multiply the congestion factor of edges ``edge_start``..``edge_end`` inclusive."""
        with self._lock:
            if edge_start > edge_end:
                raise ValueError("Router.apply_congestion_update invalid range")
            if edge_end >= len(self._congestion):
                raise IndexError("Router.apply_congestion_update range exceeds edge count")
            self._congestion.range_multiply(edge_start, edge_end, factor)

    def compute_route(self, source: int, target: int) -> RouteComputation:
        """Compute the cheapest route under the current congestion."""
        with self._lock:
            return DijkstraRouter(self._graph, self._congestion).shortest_path(source, target)

    def edge_count(self) -> int:
        return self._graph.edge_count()

    def node_count(self) -> int:
        return self._graph.node_count()

    @classmethod
    def from_json(cls, config: Mapping[str, Any]) -> "Router":
        """Build a router from a parsed JSON document with 'nodes' and 'edges'."""
        if not isinstance(config, Mapping) or "nodes" not in config:
            raise ValueError("Router.from_json missing 'nodes' field")
        edges = config.get("edges")
        if not isinstance(edges, list):
            raise ValueError("Router.from_json missing 'edges' array")

        graph = Graph(_as_index(config["nodes"], "nodes"))
        for edge in edges:
            if not isinstance(edge, Mapping) or not all(
                key in edge for key in ("from", "to", "base_travel_time")
            ):
                raise ValueError("Router.from_json edge missing required fields")
            graph.add_edge(
                _as_index(edge["from"], "from"),
                _as_index(edge["to"], "to"),
                _as_number(edge["base_travel_time"], "base_travel_time"),
            )

        return cls(graph, SegmentTree(graph.edge_count()))