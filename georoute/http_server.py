"""HTTP interface to a routing engine."""

from __future__ import annotations

import contextlib
import json
import logging
import math
import re
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable
from urllib.parse import parse_qs, urlsplit

from georoute.engine import GeoRouteEngine, RouteResponse

_JSON = "application/json"
_UNSIGNED = re.compile(r"\s*([+-]?)(\d+)")
_TYPE_NAMES = {dict: "object", list: "array", str: "string", bool: "boolean", type(None): "null"}

_log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpServerOptions:
    """Address the server listens on."""

    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status, body and content type of a handled request."""

    status: int = 200
    body: str = ""
    content_type: str = _JSON

    def json(self) -> Any:
        return json.loads(self.body)


def _dump(payload: Any, indent: int | None = None) -> str:
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(payload, sort_keys=True, separators=separators, indent=indent)


def _ok(payload: Any, indent: int | None = None) -> HttpResponse:
    return HttpResponse(200, _dump(payload, indent))


def _error(message: str, status: int = 400) -> HttpResponse:
    return HttpResponse(status, _dump({"error": message}))


def _parse_unsigned(text: str) -> int:
    """Parse a leading unsigned integer and narrow it to a 32-bit node id."""
    match = _UNSIGNED.match(text)
    if match is None:
        raise ValueError("stoul")
    magnitude = int(match.group(2))
    if magnitude >= 2**64:
        raise ValueError("stoul")
    value = -magnitude if match.group(1) == "-" else magnitude
    return value % 2**64 % 2**32


def _type_name(value: Any) -> str:
    return _TYPE_NAMES.get(type(value), "number")


def _json_unsigned(value: Any, bits: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"type must be number, but is {_type_name(value)}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("number is not finite")
        value = int(value)
    return value % 2**bits


def _json_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"type must be number, but is {_type_name(value)}")
    return float(value)


def _route_payload(source: int, target: int, response: RouteResponse) -> dict[str, Any]:
    result = response.result
    return {
        "src": source,
        "dst": target,
        "distance": result.total_travel_time,
        "eta_ms": int(result.total_travel_time * 1000),
        "path": list(result.nodes),
        "reachable": result.reachable,
        "stats": {
            "compute_us": response.compute_time_us,
            "expanded_nodes": response.expanded_nodes,
        },
    }


def _parse_body(body: bytes | str) -> Any:
    try:
        text = body.decode("utf-8") if isinstance(body, bytes) else body
        return json.loads(text)
    except ValueError:
        return None


def _route_from_query(engine: GeoRouteEngine, query: str) -> HttpResponse:
    params = parse_qs(query, keep_blank_values=True)
    src_param = params.get("src", [""])[0]
    dst_param = params.get("dst", [""])[0]
    if not src_param or not dst_param:
        return _error("missing 'src' or 'dst' query parameters")
    try:
        source = _parse_unsigned(src_param)
        target = _parse_unsigned(dst_param)
        response = engine.route(source, target)
    except Exception as exc:  # every routing failure is a client error
        return _error(str(exc))
    return _ok(_route_payload(source, target, response))


def _post_route(engine: GeoRouteEngine, body: bytes | str) -> HttpResponse:
    payload = _parse_body(body)
    if payload is None:
        return _error("invalid JSON payload")
    if not isinstance(payload, dict) or "source" not in payload or "target" not in payload:
        return _error("missing 'source' or 'target'")
    source = _json_unsigned(payload["source"], 32)
    target = _json_unsigned(payload["target"], 32)
    response = engine.route(source, target)
    return _ok(_route_payload(source, target, response))


def _post_congestion(engine: GeoRouteEngine, body: bytes | str) -> HttpResponse:
    payload = _parse_body(body)
    if payload is None:
        return _error("invalid JSON payload")
    if not isinstance(payload, dict) or not all(key in payload for key in ("edge_start", "edge_end", "factor")):
        return _error("missing 'edge_start', 'edge_end', or 'factor'")
    edge_start = _json_unsigned(payload["edge_start"], 64)
    edge_end = _json_unsigned(payload["edge_end"], 64)
    factor = _json_float(payload["factor"])
    engine.apply_congestion_update(edge_start, edge_end, factor)
    return _ok({"status": "ok"})


def _metrics(engine: GeoRouteEngine) -> HttpResponse:
    stats = engine.stats()
    metrics = {
        "queries_total": stats.total_queries,
        "updates_total": stats.total_updates,
        "compute_time_total_us": stats.total_compute_time_us,
        "compute_time_max_us": stats.max_compute_time_us,
        "compute_time_avg_us": stats.average_compute_time_us(),
    }
    return _ok(metrics, indent=2)


_POST_HANDLERS: dict[str, Callable[[GeoRouteEngine, bytes | str], HttpResponse]] = {
    "/api/v1/route": _post_route,
    "/api/v1/congestion/update": _post_congestion,
}


def handle_request(engine: GeoRouteEngine, method: str, target: str, body: bytes | str = b"") -> HttpResponse:
    """Dispatch one request (method, request target and body) to its endpoint."""
    parts = urlsplit(target)
    path = parts.path
    method = method.upper()

    if method == "GET":
        if path in ("/health", "/api/v1/health"):
            return _ok({"status": "ok"})
        if path == "/route":
            return _route_from_query(engine, parts.query)
        if path == "/metrics":
            return _metrics(engine)
    elif method == "POST":
        handler = _POST_HANDLERS.get(path)
        if handler is not None:
            try:
                return handler(engine, body)
            except Exception as exc:  # endpoint failures are reported to the client
                return _error(str(exc))

    return HttpResponse(404, "", "text/plain")


def create_server(engine: GeoRouteEngine, options: HttpServerOptions | None = None) -> ThreadingHTTPServer:
    """Bind an HTTP server that serves ``engine``; the caller runs and closes it."""
    options = options or HttpServerOptions()

    class _Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            self._dispatch()

        def do_POST(self) -> None:
            self._dispatch()

        def _dispatch(self) -> None:
            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                length = 0
            body = self.rfile.read(length) if length > 0 else b""
            response = handle_request(engine, self.command, self.path, body)
            payload = response.body.encode("utf-8")
            self.send_response(response.status)
            self.send_header("Content-Type", response.content_type)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args: Any) -> None:
            """Send access log lines to the module logger instead of stderr."""
            _log.debug("%s - " + format, self.address_string(), *args)

    return ThreadingHTTPServer((options.host, options.port), _Handler)


def run_http_server(engine: GeoRouteEngine, options: HttpServerOptions | None = None) -> int:
    """Serve until interrupted; return 0, or 1 if the address cannot be bound."""
    try:
        server = create_server(engine, options)
    except OSError:
        return 1
    with server, contextlib.suppress(KeyboardInterrupt):
        server.serve_forever()
    return 0