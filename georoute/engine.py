"""Routing engine that wraps a router and keeps query statistics."""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from georoute.router import Router
from georoute.types import RouteResult


@dataclass(slots=True)
class EngineStats:
    """Running totals over all queries and updates handled by an engine."""

    total_queries: int = 0
    total_updates: int = 0
    total_compute_time_us: float = 0.0
    max_compute_time_us: float = 0.0

    def average_compute_time_us(self) -> float:
        """Mean route computation time, or 0.0 when no query has run."""
        if self.total_queries == 0:
            return 0.0
        return self.total_compute_time_us / self.total_queries


@dataclass(slots=True)
class RouteResponse:
    """A route result with its timing and a snapshot of the engine statistics."""

    result: RouteResult = field(default_factory=RouteResult)
    stats: EngineStats = field(default_factory=EngineStats)
    expanded_nodes: int = 0
    compute_time_us: float = 0.0


class GeoRouteEngine:
    """Thread-safe front end for routing queries and congestion updates."""

    def __init__(self, router: Router) -> None:
        self._router = router
        self._stats = EngineStats()
        self._stats_lock = threading.Lock()

    @property
    def router(self) -> Router:
        return self._router

    def route(self, source: int, target: int) -> RouteResponse:
        """Compute a route and record how long it took."""
        start = time.perf_counter()
        computation = self._router.compute_route(source, target)
        compute_time_us = (time.perf_counter() - start) * 1_000_000.0

        with self._stats_lock:
            self._stats.total_queries += 1
            self._stats.total_compute_time_us += compute_time_us
            self._stats.max_compute_time_us = max(self._stats.max_compute_time_us, compute_time_us)
            snapshot = replace(self._stats)

        return RouteResponse(
            result=computation.result,
            stats=snapshot,
            expanded_nodes=computation.stats.expanded_nodes,
            compute_time_us=compute_time_us,
        )

    def apply_congestion_update(self, edge_start: int, edge_end: int, factor: float) -> None:
        """Multiply the congestion factor of an inclusive edge range."""
        self._router.apply_congestion_update(edge_start, edge_end, factor)
        with self._stats_lock:
            self._stats.total_updates += 1

    def stats(self) -> EngineStats:
        """Return a copy of the current statistics."""
        with self._stats_lock:
            return replace(self._stats)

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._stats = EngineStats()

    @classmethod
    def from_json(cls, config: Mapping[str, Any]) -> "GeoRouteEngine":
        """Build an engine from a parsed graph document."""
        return cls(Router.from_json(config))