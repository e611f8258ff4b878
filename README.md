# georoute

A small real-time routing engine for directed road graphs. Routes are found
with Dijkstra's algorithm. Every edge has a base travel time, and that time is
multiplied by the edge's congestion factor. The congestion factors are held in a
lazy segment tree, so one update can rescale a whole range of edge ids in
logarithmic time.

The package needs only the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Graph files

A graph is a JSON document that gives a node count and a list of directed edges:

```json
{
  "nodes": 4,
  "edges": [
    { "from": 0, "to": 1, "base_travel_time": 1.0 },
    { "from": 1, "to": 3, "base_travel_time": 1.0 },
    { "from": 0, "to": 2, "base_travel_time": 3.0 },
    { "from": 2, "to": 3, "base_travel_time": 1.0 }
  ]
}
```

Nodes are numbered from `0` to `nodes - 1`. Edges get the ids `0, 1, 2, ...`
in the order they are listed. Congestion updates refer to these ids through an
inclusive range `[edge_start, edge_end]`. Every edge starts with a congestion
factor of `1.0`, and an update multiplies the current factor of each edge in
the range.

A missing `nodes` field, a missing `edges` array, or an edge without `from`,
`to` or `base_travel_time` raises `ValueError`. So does an edge that names a
node outside the graph.

## Command line

### One-off queries: `georoute-cli`

```
georoute-cli --graph graph.json --route 0 3
georoute-cli --graph graph.json --congestion 0 1 2.5 --route 0 3
```

`--congestion <edge_start> <edge_end> <factor>` and `--route <source> <target>`
can be repeated. They run in the order given. Each route query prints something
like:

```
Route from 0 to 3:
Total travel time: 2 seconds
Path nodes: 0 -> 1 -> 3
```

If no route exists, it prints `Route unreachable` instead. `--graph` is
required, and `--help` prints the usage. The command exits with status 1 in
these cases: the arguments cannot be used, the graph file cannot be opened or
parsed, or an operation fails (for example, an edge range past the last edge).

### HTTP server: `georoute-server`

```
georoute-server --graph graph.json --host 127.0.0.1 --port 8080
```

The host defaults to `0.0.0.0` and the port to `8080`. The server runs until it
is interrupted. It exits with status 1 if the graph cannot be loaded or the
address cannot be bound. Endpoints:

| Method | Path                         | Purpose                                                 |
|--------|------------------------------|---------------------------------------------------------|
| GET    | `/health`, `/api/v1/health`  | Liveness check, returns `{"status":"ok"}`               |
| GET    | `/route?src=0&dst=3`         | Compute a route                                         |
| POST   | `/api/v1/route`              | Body `{"source": 0, "target": 3}`                       |
| POST   | `/api/v1/congestion/update`  | Body `{"edge_start": 0, "edge_end": 1, "factor": 2.5}`  |
| GET    | `/metrics`                   | Query and update counters with timing totals            |

Responses are JSON with sorted keys. A route response looks like this:

```json
{"distance":2.0,"dst":3,"eta_ms":2000,"path":[0,1,3],"reachable":true,"src":0,"stats":{"compute_us":12.0,"expanded_nodes":3}}
```

`/metrics` reports `queries_total`, `updates_total`, `compute_time_total_us`,
`compute_time_max_us` and `compute_time_avg_us`.

A malformed request or a failed operation gets status `400` and a body of the
form `{"error":"..."}`. Any other path or method gets `404` with an empty body.

The same dispatch can be used without a socket:

```python
from georoute.http_server import handle_request

response = handle_request(engine, "GET", "/route?src=0&dst=3")
print(response.status, response.json()["path"])
```

`create_server(engine, HttpServerOptions(host, port))` returns a bound
`ThreadingHTTPServer` for the caller to run and close. `run_http_server` serves
until interrupted.

### Benchmarks: `georoute-bench`

```
georoute-bench --mode mixed --queries 10000 --updates 1000 --grid-size 160 --seed 42
```

The benchmark builds a grid graph with edges in both directions and times
random route queries. In `mixed` mode, congestion updates are interleaved with
the queries. In `update` mode, the updates are timed on their own after the
queries. The report gives the p50, p95 and p99 latency, the minimum, maximum
and mean latency in microseconds, and the update throughput. A seed of `0`
(the default) picks a random seed. Unrecognised arguments are ignored. A
negative or non-numeric count exits with status 1.

From Python, `georoute.bench.run_benchmark(...)` returns a `BenchmarkReport`,
and `run_routing_benchmark(...)` runs a fixed query workload with periodic
updates and returns its summary text.

## Library use

```python
from georoute.graph import Graph
from georoute.router import Router
from georoute.segment_tree import SegmentTree

graph = Graph(4)
graph.add_edge(0, 1, 1.0)  # edge 0
graph.add_edge(1, 3, 1.0)  # edge 1
graph.add_edge(0, 2, 2.0)  # edge 2
graph.add_edge(2, 3, 1.0)  # edge 3

router = Router(graph, SegmentTree(graph.edge_count()))

computation = router.compute_route(0, 3)
print(computation.result.nodes)              # [0, 1, 3]
print(computation.result.total_travel_time)  # 2.0
print(computation.stats.expanded_nodes)

router.apply_congestion_update(0, 1, 2.5)
print(router.compute_route(0, 3).result.nodes)  # [0, 2, 3]
```

If no segment tree is given, `Router` creates one that covers every edge of the
graph. `Router.from_json` builds a router from a parsed graph document.
`GeoRouteEngine` wraps a router and keeps running statistics:

```python
from georoute.engine import GeoRouteEngine

engine = GeoRouteEngine.from_json(document)
response = engine.route(0, 3)
print(response.result.reachable, response.compute_time_us, response.expanded_nodes)
print(engine.stats().total_queries)
engine.reset_stats()
```

A node id outside the graph raises `IndexError`, and so does a congestion range
that goes past the last edge. A reversed range (`edge_start > edge_end`) raises
`ValueError`.

## Limits

The graph is fixed once it is loaded. Nodes and edges cannot be added through
the server or the command line. Congestion factors live only in memory, so they
are lost when the process exits. The server has no authentication.