"""
Tests for loading and exporting relation graphs.
"""

import json

import networkx as nx
import pandas as pd
import pytest

from grapho_relations.core.graph import Edge
from grapho_relations.io.exporters import (edges_to_dataframe, export_graph, export_results_json,
                                           to_networkx, vertices_to_dataframe)
from grapho_relations.io.loaders import (graph_from_dataframe, graph_from_networkx, load_graph,
                                         load_graph_csv, load_graph_json)
from grapho_relations.pipeline_config import GraphLoadError


@pytest.fixture
def edges_csv(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text("source,destination\n1,2\n1,10\n2,10\n")
    return path


def test_load_graph_csv(edges_csv):
    graph = load_graph_csv(str(edges_csv))
    assert graph.name == "edges"
    assert graph.vertices == frozenset({"1", "2", "10"})
    assert graph.edges == frozenset({Edge("1", "2"), Edge("1", "10"), Edge("2", "10")})
    assert graph.iterative_breadth_first_search() == ["1", "2", "10"]


def test_load_graph_csv_with_vertex_file(edges_csv, tmp_path):
    vertices_path = tmp_path / "vertices.csv"
    vertices_path.write_text("vertex\n1\n5\n")

    graph = load_graph_csv(str(edges_csv), vertices_path=str(vertices_path))
    assert "5" in graph
    assert graph.roots() == ["1", "5"]


def test_load_graph_csv_custom_columns(tmp_path):
    path = tmp_path / "links.csv"
    path.write_text("from,to\n3,4\n")
    graph = load_graph_csv(str(path), source_col="from", destination_col="to")
    assert graph.edges == frozenset({Edge("3", "4")})


def test_load_graph_csv_missing_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("origin,target\n1,2\n")
    with pytest.raises(GraphLoadError):
        load_graph_csv(str(path))


def test_load_graph_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_graph_csv(str(tmp_path / "absent.csv"))


def test_load_graph_json(tmp_path):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({
        "name": "sample",
        "vertices": [1, 2, 3, 7],
        "edges": [[1, 2], {"source": 2, "destination": 3}],
    }))

    graph = load_graph_json(str(path))
    assert graph.name == "sample"
    assert graph.vertices == frozenset({"1", "2", "3", "7"})
    assert graph.edges == frozenset({Edge("1", "2"), Edge("2", "3")})
    assert graph.roots() == ["1", "7"]


@pytest.mark.parametrize("document", [
    "{not json",
    json.dumps([1, 2]),
    json.dumps({"edges": [[1, 2, 3]]}),
    json.dumps({"edges": [{"from": 1, "to": 2}]}),
])
def test_load_graph_json_rejects_malformed_documents(tmp_path, document):
    path = tmp_path / "graph.json"
    path.write_text(document)
    with pytest.raises(GraphLoadError):
        load_graph_json(str(path))


def test_load_graph_dispatches_on_extension(edges_csv, tmp_path):
    assert len(load_graph(str(edges_csv)).edges) == 3
    with pytest.raises(GraphLoadError):
        load_graph(str(tmp_path / "graph.txt"))


def test_graph_from_dataframe_drops_incomplete_rows():
    df = pd.DataFrame({"source": ["1", "2", None], "destination": ["2", None, "3"]})
    graph = graph_from_dataframe(df, vertices=["9"])
    assert graph.edges == frozenset({Edge("1", "2")})
    assert graph.vertices == frozenset({"1", "2", "9"})


def test_graph_from_networkx_directed():
    G = nx.DiGraph(name="net")
    G.add_edges_from([(1, 2), (2, 3)])
    G.add_node(10)

    graph = graph_from_networkx(G)
    assert graph.name == "net"
    assert graph.vertices == frozenset({"1", "2", "3", "10"})
    assert graph.roots() == ["1", "10"]


def test_graph_from_networkx_undirected_is_symmetric():
    G = nx.Graph()
    G.add_edge("1", "2")
    graph = graph_from_networkx(G)
    assert graph.is_symmetric()
    assert graph.edges == frozenset({Edge("1", "2"), Edge("2", "1")})


def test_to_networkx_keeps_vertex_order(branching_graph):
    G = to_networkx(branching_graph)
    assert isinstance(G, nx.DiGraph)
    assert list(G.nodes) == ["1", "2", "3", "4"]
    assert list(G.edges) == [("1", "2"), ("1", "3"), ("2", "4")]


def test_edges_and_vertices_dataframes():
    from grapho_relations.core.graph import RelationGraph
    graph = RelationGraph({"1", "2", "10"}, {("10", "10"), ("1", "10"), ("1", "2")})

    edges_df = edges_to_dataframe(graph)
    assert list(edges_df.columns) == ["source", "destination", "self_loop"]
    assert list(zip(edges_df.source, edges_df.destination)) == [("1", "2"), ("1", "10"), ("10", "10")]
    assert list(edges_df.self_loop) == [False, False, True]

    assert list(vertices_to_dataframe(graph).vertex) == ["1", "2", "10"]


def test_export_graph_can_be_loaded_back(branching_graph, tmp_path):
    paths = export_graph(branching_graph, str(tmp_path / "out"), base_name="tree")

    assert paths["edges"].endswith("tree_edges.csv")
    loaded = load_graph_csv(paths["edges"], vertices_path=paths["vertices"])
    assert loaded.vertices == branching_graph.vertices
    assert loaded.edges == branching_graph.edges


def test_export_results_json(tmp_path):
    path = export_results_json({"roots": ["1"]}, str(tmp_path / "nested" / "results.json"))
    with open(path) as f:
        assert json.load(f) == {"roots": ["1"]}
