"""Server application: configuration, lifecycle and command-line entry point."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Sequence

from georoute.engine import GeoRouteEngine
from georoute.http_server import HttpServerOptions, run_http_server

_PROG = "georoute-server"


@dataclass(slots=True)
class AppConfig:
    """Where to load the graph from and where to listen."""

    graph_path: str = ""
    host: str = "0.0.0.0"
    port: int = 8080


class GeoRouteApp:
    """Loads the graph into an engine and serves it over HTTP."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._engine: GeoRouteEngine | None = None
        self._initialized = False

    def __enter__(self) -> "GeoRouteApp":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def engine(self) -> GeoRouteEngine | None:
        return self._engine

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> bool:
        """Load the graph file; report failures and return whether it worked."""
        if self._initialized:
            return True

        path = self._config.graph_path
        try:
            handle = open(path, encoding="utf-8")
        except OSError:
            print(f"Failed to open graph file: {path}", file=sys.stderr)
            return False

        with handle:
            try:
                self._engine = GeoRouteEngine.from_json(json.load(handle))
            except (ValueError, IndexError, TypeError) as exc:
                print(f"Failed to initialize engine: {exc}", file=sys.stderr)
                return False

        self._initialized = True
        print(f"GeoRoute engine initialized with graph from: {path}")
        return True

    def run(self) -> int:
        """Serve requests until stopped; return the process exit status."""
        if not self._initialized and not self.initialize():
            return 1
        assert self._engine is not None
        print(f"Starting GeoRoute server on {self._config.host}:{self._config.port}")
        return run_http_server(self._engine, HttpServerOptions(self._config.host, self._config.port))

    def shutdown(self) -> None:
        if self._initialized:
            print("Shutting down GeoRoute server...")
            self._initialized = False


def parse_arguments(argv: Sequence[str]) -> AppConfig | None:
    """Parse server options; return None when they are not usable."""
    config = AppConfig()
    args = iter(argv)
    for arg in args:
        value = next(args, None)
        if value is None:
            return None
        if arg == "--graph":
            config.graph_path = value
        elif arg == "--host":
            config.host = value
        elif arg == "--port":
            try:
                config.port = int(value) % 65536
            except ValueError:
                return None
        else:
            return None

    if not config.graph_path:
        return None
    return config


def main(argv: Sequence[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    config = parse_arguments(args)
    if config is None:
        print(f"Usage: {_PROG} --graph <path> [--host <host>] [--port <port>]")
        return 1

    with GeoRouteApp(config) as app:
        if not app.initialize():
            return 1
        return app.run()


if __name__ == "__main__":
    sys.exit(main())