"""Result types shared by the routing components."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class RouteResult:
    """A computed route: the node sequence, its travel time and reachability."""

    nodes: list[int] = field(default_factory=list)
    total_travel_time: float = 0.0
    reachable: bool = False


@dataclass(slots=True)
class RouteStats:
    """Counters collected while a shortest-path search runs."""

    expanded_nodes: int = 0
    relaxed_edges: int = 0
    visited_nodes: int = 0


@dataclass(slots=True)
class RouteComputation:
    """A route result paired with the search statistics that produced it."""

    result: RouteResult = field(default_factory=RouteResult)
    stats: RouteStats = field(default_factory=RouteStats)