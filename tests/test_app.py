import json

import pytest

from georoute.app import AppConfig, GeoRouteApp, main, parse_arguments

GRAPH = {
    "nodes": 4,
    "edges": [
        {"from": 0, "to": 1, "base_travel_time": 1.0},
        {"from": 1, "to": 3, "base_travel_time": 1.0},
        {"from": 0, "to": 2, "base_travel_time": 3.0},
        {"from": 2, "to": 3, "base_travel_time": 1.0},
    ],
}


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(GRAPH), encoding="utf-8")
    return path


def test_parse_arguments_defaults():
    config = parse_arguments(["--graph", "roads.json"])
    assert config == AppConfig(graph_path="roads.json", host="0.0.0.0", port=8080)


def test_parse_arguments_overrides():
    config = parse_arguments(["--graph", "g.json", "--host", "127.0.0.1", "--port", "9090"])
    assert config.graph_path == "g.json"
    assert config.host == "127.0.0.1"
    assert config.port == 9090


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--host", "127.0.0.1"],
        ["--graph"],
        ["--graph", "g.json", "--bogus", "x"],
        ["--graph", "g.json", "--port", "abc"],
    ],
)
def test_parse_arguments_rejects(argv):
    assert parse_arguments(argv) is None


def test_initialize_loads_engine(graph_file, capsys):
    app = GeoRouteApp(AppConfig(graph_path=str(graph_file)))
    assert app.initialize() is True
    assert app.initialized
    assert "GeoRoute engine initialized with graph from:" in capsys.readouterr().out

    response = app.engine.route(0, 3)
    assert response.result.nodes == [0, 1, 3]
    assert response.result.total_travel_time == pytest.approx(2.0)
    assert app.initialize() is True


def test_initialize_missing_file(tmp_path, capsys):
    app = GeoRouteApp(AppConfig(graph_path=str(tmp_path / "absent.json")))
    assert app.initialize() is False
    assert "Failed to open graph file:" in capsys.readouterr().err
    assert app.engine is None


def test_initialize_invalid_graph(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text('{"edges": []}', encoding="utf-8")
    app = GeoRouteApp(AppConfig(graph_path=str(path)))
    assert app.initialize() is False
    assert "Failed to initialize engine:" in capsys.readouterr().err


def test_initialize_malformed_json(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("{nope", encoding="utf-8")
    app = GeoRouteApp(AppConfig(graph_path=str(path)))
    assert app.initialize() is False
    assert "Failed to initialize engine:" in capsys.readouterr().err


def test_run_fails_without_graph(tmp_path):
    app = GeoRouteApp(AppConfig(graph_path=str(tmp_path / "absent.json")))
    assert app.run() == 1


def test_shutdown_only_after_initialize(graph_file, capsys):
    app = GeoRouteApp(AppConfig(graph_path=str(graph_file)))
    app.shutdown()
    assert "Shutting down" not in capsys.readouterr().out

    with app:
        app.initialize()
    assert "Shutting down GeoRoute server..." in capsys.readouterr().out
    assert not app.initialized


def test_main_usage_on_bad_arguments(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_main_fails_on_missing_graph(tmp_path):
    assert main(["--graph", str(tmp_path / "absent.json")]) == 1