"""Directed road graph with per-edge base travel times."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge to node ``to`` with its base travel time and id."""

    to: int = 0
    base_travel_time: float = 0.0
    id: int = 0


class Graph:
    """Adjacency-list graph; edges are numbered in insertion order from 0."""

    def __init__(self, node_count: int = 0) -> None:
        if node_count < 0:
            raise ValueError("Graph node count must not be negative")
        self._adjacency: list[list[Edge]] = [[] for _ in range(node_count)]
        self._next_edge_id = 0

    def add_edge(self, source: int, target: int, base_travel_time: float) -> None:
        """Add a directed edge from ``source`` to ``target``."""
        count = len(self._adjacency)
        if not (0 <= source < count and 0 <= target < count):
            raise IndexError("Graph.add_edge node id out of range")
        self._adjacency[source].append(Edge(target, float(base_travel_time), self._next_edge_id))
        self._next_edge_id += 1

    def neighbors(self, node: int) -> tuple[Edge, ...]:
        """Return the outgoing edges of ``node``; empty for unknown nodes."""
        if not 0 <= node < len(self._adjacency):
            return ()
        return tuple(self._adjacency[node])

    def node_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return self._next_edge_id