import pytest

from georoute.dijkstra import DijkstraRouter
from georoute.graph import Graph
from georoute.segment_tree import SegmentTree


def _router(graph):
    return DijkstraRouter(graph, SegmentTree(graph.edge_count()))


def test_finds_shortest_path_in_simple_graph():
    graph = Graph(4)
    graph.add_edge(0, 1, 1.0)
    graph.add_edge(1, 2, 1.0)
    graph.add_edge(0, 2, 5.0)
    graph.add_edge(2, 3, 2.0)

    computation = _router(graph).shortest_path(0, 3)

    assert computation.result.reachable
    assert computation.result.total_travel_time == pytest.approx(4.0)
    assert computation.result.nodes == [0, 1, 2, 3]
    assert computation.stats.expanded_nodes > 0


def test_handles_unreachable_target():
    graph = Graph(3)
    graph.add_edge(0, 1, 2.0)

    computation = _router(graph).shortest_path(0, 2)

    assert not computation.result.reachable
    assert computation.result.nodes == []
    assert computation.result.total_travel_time == pytest.approx(0.0)
    assert computation.stats.expanded_nodes > 0


def test_zero_cost_when_source_equals_target():
    graph = Graph(2)
    graph.add_edge(0, 1, 3.0)

    computation = _router(graph).shortest_path(1, 1)

    assert computation.result.reachable
    assert computation.result.total_travel_time == pytest.approx(0.0)
    assert computation.result.nodes == [1]
    assert computation.stats.expanded_nodes == 1


def test_congestion_factors_scale_edge_costs():
    graph = Graph(3)
    graph.add_edge(0, 1, 1.0)
    graph.add_edge(1, 2, 1.0)
    graph.add_edge(0, 2, 3.0)
    tree = SegmentTree(graph.edge_count())
    router = DijkstraRouter(graph, tree)

    assert router.shortest_path(0, 2).result.nodes == [0, 1, 2]

    tree.range_multiply(0, 1, 4.0)
    computation = router.shortest_path(0, 2)
    assert computation.result.nodes == [0, 2]
    assert computation.result.total_travel_time == pytest.approx(3.0)


def test_out_of_range_nodes_raise():
    graph = Graph(2)
    graph.add_edge(0, 1, 1.0)
    router = _router(graph)
    with pytest.raises(IndexError):
        router.shortest_path(0, 2)
    with pytest.raises(IndexError):
        router.shortest_path(5, 0)