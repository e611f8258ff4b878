"""Shortest-path search over a graph with congestion factors."""

from __future__ import annotations

import heapq
import math

from georoute.graph import Graph
from georoute.segment_tree import SegmentTree
from georoute.types import RouteComputation, RouteResult, RouteStats


class DijkstraRouter:
    """Dijkstra search where each edge costs base time times its congestion factor."""

    def __init__(self, graph: Graph, congestion_tree: SegmentTree) -> None:
        self._graph = graph
        self._congestion = congestion_tree

    def shortest_path(self, source: int, target: int) -> RouteComputation:
        """Find the cheapest route from ``source`` to ``target``."""
        node_count = self._graph.node_count()
        if not (0 <= source < node_count and 0 <= target < node_count):
            raise IndexError("DijkstraRouter.shortest_path node id out of range")

        stats = RouteStats()

        if source == target:
            stats.expanded_nodes = 1
            stats.visited_nodes = 1
            return RouteComputation(RouteResult([source], 0.0, True), stats)

        distances = [math.inf] * node_count
        predecessors: list[int | None] = [None] * node_count
        visited = [False] * node_count
        distances[source] = 0.0

        queue: list[tuple[float, int]] = [(0.0, source)]
        while queue:
            cost, node = heapq.heappop(queue)
            if cost > distances[node]:
                continue

            stats.expanded_nodes += 1
            if not visited[node]:
                visited[node] = True
                stats.visited_nodes += 1

            if node == target:
                break

            for edge in self._graph.neighbors(node):
                factor = self._congestion.point_query(edge.id)
                new_cost = cost + edge.base_travel_time * factor
                if new_cost < distances[edge.to]:
                    distances[edge.to] = new_cost
                    predecessors[edge.to] = node
                    stats.relaxed_edges += 1
                    heapq.heappush(queue, (new_cost, edge.to))

        if distances[target] == math.inf:
            return RouteComputation(RouteResult(), stats)

        path: list[int] = []
        current: int | None = target
        while current is not None and len(path) <= node_count:
            path.append(current)
            if current == source:
                break
            current = predecessors[current]

        if not path or path[-1] != source:
            return RouteComputation(RouteResult(), stats)

        path.reverse()
        return RouteComputation(RouteResult(path, distances[target], True), stats)