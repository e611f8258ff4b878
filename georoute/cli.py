"""Command-line tool that loads a graph and runs route queries and congestion updates."""

from __future__ import annotations

import itertools
import json
import math
import re
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from georoute.router import Router
from georoute.types import RouteResult

_PROG = "georoute-cli"
_UNSIGNED = re.compile(r"\s*([+-]?)(\d+)")
_FLOAT = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_FLOAT32_MAX = 3.4028234663852886e38


@dataclass(frozen=True, slots=True)
class CongestionUpdate:
    """Multiply the congestion factor of edges ``edge_start``..``edge_end`` inclusive."""

    edge_start: int
    edge_end: int
    factor: float


@dataclass(frozen=True, slots=True)
class RouteQuery:
    """Compute the route from ``source`` to ``target``."""

    source: int
    target: int


Operation = Union[CongestionUpdate, RouteQuery]


@dataclass(slots=True)
class CliArguments:
    """The graph to load and the operations to run on it, in order."""

    graph_path: str = ""
    operations: list[Operation] = field(default_factory=list)


class UsageError(Exception):
    """The command line cannot be used; an empty message means help was asked for."""


def _parse_unsigned(text: str, bits: int) -> int:
    """Parse a leading integer the way an unsigned conversion does, wrapping negatives."""
    match = _UNSIGNED.match(text)
    if match is None:
        raise ValueError("stoul")
    magnitude = int(match.group(2))
    if magnitude >= 2**64:
        raise ValueError("stoul")
    value = -magnitude if match.group(1) == "-" else magnitude
    return value % 2**64 % 2**bits


def _parse_float(text: str) -> float:
    """Parse a leading single-precision number; reject values out of its range."""
    match = _FLOAT.match(text)
    if match is None:
        raise ValueError("stof")
    token = match.group(0).strip()
    value = float(token)
    special = token.lstrip("+-").lower().startswith(("inf", "nan"))
    if not special and (math.isinf(value) or abs(value) > _FLOAT32_MAX):
        raise ValueError("stof")
    return value


def _take(remaining: Iterator[str], count: int, message: str) -> list[str]:
    values = list(itertools.islice(remaining, count))
    if len(values) < count:
        raise UsageError(message)
    return values


def parse_arguments(argv: Sequence[str]) -> CliArguments:
    """Parse the command line; raise UsageError when it cannot be used."""
    args = CliArguments()
    remaining = iter(argv)
    for arg in remaining:
        if arg == "--graph":
            (args.graph_path,) = _take(remaining, 1, "--graph requires a path argument")
        elif arg == "--congestion":
            start, end, factor = _take(remaining, 3, "--congestion requires start end factor")
            try:
                update = CongestionUpdate(
                    _parse_unsigned(start, 64), _parse_unsigned(end, 64), _parse_float(factor)
                )
            except ValueError as exc:
                raise UsageError(f"Invalid --congestion parameters: {exc}") from exc
            args.operations.append(update)
        elif arg == "--route":
            source, target = _take(remaining, 2, "--route requires source target")
            try:
                query = RouteQuery(_parse_unsigned(source, 32), _parse_unsigned(target, 32))
            except ValueError as exc:
                raise UsageError(f"Invalid --route parameters: {exc}") from exc
            args.operations.append(query)
        elif arg in ("--help", "-h"):
            raise UsageError("")
        else:
            raise UsageError(f"Unknown argument: {arg}")

    if not args.graph_path:
        raise UsageError("--graph argument is required")
    return args


def load_graph_json(path: str) -> Any:
    """Read and parse the graph document at ``path``."""
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def format_route_result(result: RouteResult) -> str:
    """Describe a route result as printed by the command."""
    if not result.reachable:
        return "Route unreachable"
    path = " -> ".join(str(node) for node in result.nodes)
    return f"Total travel time: {result.total_travel_time:g} seconds\nPath nodes: {path}"


def _usage() -> str:
    return (
        "GeoRoute CLI\n"
        f"Usage: {_PROG} --graph <path> [--congestion <edge_start> <edge_end> <factor>]... "
        "[--route <source> <target>]..."
    )


def _execute(router: Router, operation: Operation) -> None:
    if isinstance(operation, CongestionUpdate):
        router.apply_congestion_update(operation.edge_start, operation.edge_end, operation.factor)
        print(
            f"Applied congestion factor {operation.factor:g} to edges "
            f"[{operation.edge_start}, {operation.edge_end}]"
        )
    else:
        computation = router.compute_route(operation.source, operation.target)
        print(f"Route from {operation.source} to {operation.target}:")
        print(format_route_result(computation.result))


def main(argv: Sequence[str] | None = None) -> int:
    raw = sys.argv[1:] if argv is None else list(argv)
    try:
        args = parse_arguments(raw)
    except UsageError as exc:
        if str(exc):
            print(exc, file=sys.stderr)
        print(_usage())
        return 1

    try:
        graph = load_graph_json(args.graph_path)
    except OSError:
        print(f"Failed to open graph file: {args.graph_path}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Failed to parse graph JSON: {exc}", file=sys.stderr)
        return 1

    try:
        router = Router.from_json(graph)
        if not args.operations:
            print("No operations supplied. Use --route and/or --congestion.")
            return 0
        for operation in args.operations:
            _execute(router, operation)
    except (ValueError, IndexError, RuntimeError, TypeError) as exc:
        print(f"Error during CLI execution: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())