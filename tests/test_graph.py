import pytest

from georoute.graph import Edge, Graph


def test_new_graph_has_nodes_and_no_edges():
    graph = Graph(5)
    assert graph.node_count() == 5
    assert graph.edge_count() == 0
    assert all(graph.neighbors(node) == () for node in range(5))


def test_default_graph_is_empty():
    graph = Graph()
    assert graph.node_count() == 0
    assert graph.edge_count() == 0


def test_edges_are_numbered_in_insertion_order():
    graph = Graph(3)
    graph.add_edge(0, 1, 1.0)
    graph.add_edge(1, 2, 2.5)
    graph.add_edge(0, 2, 3.0)
    assert graph.edge_count() == 3
    assert graph.neighbors(0) == (Edge(1, 1.0, 0), Edge(2, 3.0, 2))
    assert graph.neighbors(1) == (Edge(2, 2.5, 1),)
    assert graph.neighbors(2) == ()


def test_edge_ids_are_unique_and_contiguous():
    graph = Graph(4)
    for source in range(4):
        for target in range(4):
            if source != target:
                graph.add_edge(source, target, 1.0)
    ids = sorted(edge.id for node in range(4) for edge in graph.neighbors(node))
    assert ids == list(range(graph.edge_count()))


def test_add_edge_out_of_range_raises():
    graph = Graph(2)
    with pytest.raises(IndexError):
        graph.add_edge(0, 2, 1.0)
    with pytest.raises(IndexError):
        graph.add_edge(2, 0, 1.0)
    with pytest.raises(IndexError):
        graph.add_edge(-1, 0, 1.0)
    assert graph.edge_count() == 0


def test_neighbors_of_unknown_node_is_empty():
    graph = Graph(2)
    graph.add_edge(0, 1, 1.0)
    assert graph.neighbors(10) == ()
    assert graph.neighbors(-1) == ()


def test_neighbors_cannot_mutate_graph():
    graph = Graph(2)
    graph.add_edge(0, 1, 1.0)
    edges = list(graph.neighbors(0))
    edges.clear()
    assert len(graph.neighbors(0)) == 1


def test_negative_node_count_rejected():
    with pytest.raises(ValueError):
        Graph(-3)