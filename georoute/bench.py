"""Routing and congestion-update benchmarks on a synthetic grid graph."""

from __future__ import annotations

import itertools
import math
import random
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from georoute.graph import Graph
from georoute.router import Router
from georoute.segment_tree import SegmentTree


@dataclass(slots=True)
class BenchmarkContext:
    """A router over a grid graph with its node and edge counts."""

    router: Router
    node_count: int
    edge_count: int


def build_grid_router(rows: int, cols: int) -> BenchmarkContext:
    """Build a grid of ``rows`` x ``cols`` nodes joined by edges in both directions."""
    graph = Graph(rows * cols)
    for r, c in itertools.product(range(rows), range(cols)):
        current = r * cols + c
        if c + 1 < cols:
            right = current + 1
            base = 1.0 + ((r + c) % 7) * 0.1
            graph.add_edge(current, right, base)
            graph.add_edge(right, current, base)
        if r + 1 < rows:
            down = current + cols
            base = 1.0 + ((r + c) % 5) * 0.15
            graph.add_edge(current, down, base)
            graph.add_edge(down, current, base)

    edge_count = graph.edge_count()
    return BenchmarkContext(Router(graph, SegmentTree(edge_count)), rows * cols, edge_count)


def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Nearest-rank percentile of already sorted values; 0.0 when there are none."""
    if not sorted_values:
        return 0.0
    last = len(sorted_values) - 1
    index = math.ceil(fraction * len(sorted_values)) - 1
    if index < 0 or index > last:
        index = last
    return sorted_values[index]


@dataclass(slots=True)
class PercentileStats:
    """Summary of a set of timings in microseconds."""

    p50: float = 0.0
    p95: float = 0.0
    p99: float = 0.0
    maximum: float = 0.0
    minimum: float = 0.0
    mean: float = 0.0
    count: int = 0

    @classmethod
    def compute(cls, values: Sequence[float]) -> "PercentileStats":
        if not values:
            return cls()
        ordered = sorted(values)
        return cls(
            p50=percentile(ordered, 0.50),
            p95=percentile(ordered, 0.95),
            p99=percentile(ordered, 0.99),
            maximum=ordered[-1],
            minimum=ordered[0],
            mean=sum(ordered) / len(ordered),
            count=len(ordered),
        )

    def format(self, label: str) -> str:
        return "\n".join(
            [
                label,
                f"  queries={self.count}",
                f"  p50_us={self.p50:g}",
                f"  p95_us={self.p95:g}",
                f"  p99_us={self.p99:g}",
                f"  max_us={self.maximum:g}",
                f"  min_us={self.minimum:g}",
                f"  mean_us={self.mean:g}",
            ]
        )


class _Workload:
    """Draws random route queries and congestion updates against a context."""

    def __init__(self, context: BenchmarkContext, rng: random.Random) -> None:
        self._context = context
        self._rng = rng
        self._max_span = min(750, context.edge_count - 1) if context.edge_count > 0 else 0

    def update(self) -> float:
        edge_count = self._context.edge_count
        if edge_count == 0:
            raise ValueError("graph has no edges to update")
        start = self._rng.randint(0, edge_count - 1)
        span = min(self._rng.randint(0, self._max_span), edge_count - start - 1)
        factor = self._rng.uniform(0.8, 1.3)
        began = time.perf_counter()
        self._context.router.apply_congestion_update(start, start + span, factor)
        return (time.perf_counter() - began) * 1_000_000.0

    def route(self) -> tuple[float, bool]:
        node_count = self._context.node_count
        source = self._rng.randint(0, node_count - 1)
        target = self._rng.randint(0, node_count - 1)
        if source == target:
            target = (target + 1) % node_count
        began = time.perf_counter()
        computation = self._context.router.compute_route(source, target)
        elapsed = (time.perf_counter() - began) * 1_000_000.0
        return elapsed, computation.result.reachable


@dataclass(slots=True)
class BenchmarkReport:
    """Settings and measured timings of one benchmark run."""

    mode: str
    grid_size: int
    queries: int
    updates: int
    seed: int
    node_count: int
    edge_count: int
    route_times: list[float] = field(default_factory=list)
    update_times: list[float] = field(default_factory=list)
    unreachable_count: int = 0

    def format(self) -> str:
        lines = [
            "GeoRoute Benchmark",
            "==================",
            f"Mode: {self.mode}",
            f"Grid size: {self.grid_size}x{self.grid_size}",
            f"Queries: {self.queries}",
            f"Updates: {self.updates}",
            f"Seed: {self.seed or 'random'}",
            "",
            f"Graph: {self.node_count} nodes, {self.edge_count} edges",
            "",
            "ROUTE_BENCH",
        ]
        if self.route_times:
            lines.append(PercentileStats.compute(self.route_times).format("route"))
        lines.append("")
        if self.update_times:
            stats = PercentileStats.compute(self.update_times)
            throughput = 1_000_000.0 / stats.mean if stats.mean > 0 else 0.0
            lines += [
                "UPDATE_BENCH",
                stats.format("update"),
                f"  throughput_updates_per_sec={throughput:g}",
                "",
            ]
        if self.unreachable_count > 0:
            lines.append(f"Unreachable routes: {self.unreachable_count}")
        return "\n".join(lines)


def run_benchmark(
    mode: str = "mixed",
    queries: int = 10000,
    updates: int = 1000,
    seed: int = 0,
    grid_size: int = 160,
) -> BenchmarkReport:
    """Time random route queries, interleaved with updates in 'mixed' mode.

    In 'update' mode the updates run after the queries. A seed of 0 picks a random seed.
    """
    if grid_size <= 0:
        raise ValueError("grid size must be positive")
    rng = random.Random(seed if seed else None)
    context = build_grid_router(grid_size, grid_size)
    workload = _Workload(context, rng)

    report = BenchmarkReport(
        mode, grid_size, queries, updates, seed, context.node_count, context.edge_count
    )
    update_interval = queries // updates if mode == "mixed" and queries > 0 and updates > 0 else 0

    for i in range(queries):
        if update_interval > 0 and i % update_interval == 0 and context.edge_count > 0:
            report.update_times.append(workload.update())
        elapsed, reachable = workload.route()
        report.route_times.append(elapsed)
        if not reachable:
            report.unreachable_count += 1

    if mode == "update" and updates > 0:
        report.update_times.extend(workload.update() for _ in range(updates))

    return report


def run_routing_benchmark(
    rows: int = 160,
    cols: int = 160,
    total_queries: int = 200,
    update_interval: int = 10,
    seed: int | None = None,
) -> str:
    """Run a fixed query workload with periodic updates and return the summary text."""
    if rows <= 0 or cols <= 0:
        raise ValueError("grid dimensions must be positive")
    rng = random.Random(seed)
    context = build_grid_router(rows, cols)
    workload = _Workload(context, rng)

    route_times: list[float] = []
    update_times: list[float] = []
    unreachable = 0
    for i in range(total_queries):
        if update_interval > 0 and i % update_interval == 0 and context.edge_count > 0:
            update_times.append(workload.update())
        elapsed, reachable = workload.route()
        route_times.append(elapsed)
        if not reachable:
            unreachable += 1

    average_route = sum(route_times) / len(route_times) if route_times else 0.0
    max_route = max(route_times, default=0.0)
    lines = [
        "GeoRoute Routing Benchmark",
        f"Grid size: {rows} x {cols} ({context.node_count} nodes, "
        f"{context.edge_count} directed edges)",
        f"Total queries: {len(route_times)}, average route time: {average_route:g} us, "
        f"max route time: {max_route:g} us",
    ]
    if update_times:
        average_update = sum(update_times) / len(update_times)
        lines.append(
            f"Congestion updates: {len(update_times)}, average update time: {average_update:g} us"
        )
    lines.append(f"Unreachable routes: {unreachable}")
    return "\n".join(lines)


_INTEGER_OPTIONS = {"--queries": "queries", "--updates": "updates", "--seed": "seed", "--grid-size": "grid_size"}


def main(argv: Sequence[str] | None = None) -> int:
    raw = sys.argv[1:] if argv is None else list(argv)
    settings: dict[str, object] = {}
    remaining = iter(raw)
    for arg in remaining:
        if arg != "--mode" and arg not in _INTEGER_OPTIONS:
            continue
        value = next(remaining, None)
        if value is None:
            break
        if arg == "--mode":
            settings["mode"] = value
            continue
        try:
            number = int(value)
        except ValueError:
            number = -1
        if number < 0:
            print(f"Invalid value for {arg}: {value}", file=sys.stderr)
            return 1
        settings[_INTEGER_OPTIONS[arg]] = number

    try:
        report = run_benchmark(**settings)  # type: ignore[arg-type]
    except ValueError as exc:
        print(f"Benchmark failed: {exc}", file=sys.stderr)
        return 1
    print(report.format())
    return 0


if __name__ == "__main__":
    sys.exit(main())