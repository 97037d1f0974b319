"""
Functions for exporting relation graphs and analysis results.
"""

import os
import json
import logging

import pandas as pd
import networkx as nx

__all__ = ['to_networkx', 'edges_to_dataframe', 'vertices_to_dataframe',
           'export_graph', 'export_results_json']

logger = logging.getLogger(__name__)


def to_networkx(graph):
    """
    Convert a RelationGraph to a networkx DiGraph.

    Nodes are added in the graph's vertex order and edges in
    (source, destination) order, so the result is deterministic.

    Parameters
    ----------
    graph : RelationGraph
        Graph to convert

    Returns
    -------
    networkx.DiGraph
        The converted graph
    """
    G = nx.DiGraph(name=graph.name or '')
    G.add_nodes_from(graph.sort_vertices(graph.vertices))
    for vertex in graph.sort_vertices(graph.vertices):
        for destination in graph.successors(vertex):
            G.add_edge(vertex, destination)
    return G


def edges_to_dataframe(graph):
    """
    Build a DataFrame with one row per edge.

    Parameters
    ----------
    graph : RelationGraph
        Graph to convert

    Returns
    -------
    DataFrame
        Columns ``source``, ``destination`` and ``self_loop``, sorted by
        source then destination
    """
    rows = []
    for vertex in graph.sort_vertices(graph.vertices):
        for destination in graph.successors(vertex):
            rows.append({
                "source": vertex,
                "destination": destination,
                "self_loop": vertex == destination
            })
    return pd.DataFrame(rows, columns=["source", "destination", "self_loop"])


def vertices_to_dataframe(graph):
    """Build a DataFrame with one row per vertex, in vertex order."""
    return pd.DataFrame({"vertex": graph.sort_vertices(graph.vertices)})


def export_graph(graph, output_dir, base_name=None):
    """
    Export a RelationGraph to CSV files.

    Parameters
    ----------
    graph : RelationGraph
        Graph to export
    output_dir : str
        Directory to save the output files
    base_name : str, optional
        Base name for output files (default is graph.name or 'graph')

    Returns
    -------
    dict
        Paths of the written files, keyed by 'vertices' and 'edges'
    """
    # Create output directory if it doesn't exist
    os.makedirs(output_dir, exist_ok=True)

    if base_name is None:
        base_name = graph.name if graph.name else 'graph'

    vertices_path = os.path.join(output_dir, f"{base_name}_vertices.csv")
    vertices_to_dataframe(graph).to_csv(vertices_path, index=False)

    edges_path = os.path.join(output_dir, f"{base_name}_edges.csv")
    edges_to_dataframe(graph).drop(columns=["self_loop"]).to_csv(edges_path, index=False)

    logger.info(f"Exported {graph!r} to {output_dir}")
    return {"vertices": vertices_path, "edges": edges_path}


def export_results_json(results, filepath):
    """
    Write analysis results to a JSON file.

    Parameters
    ----------
    results : dict
        JSON-serialisable results (properties, roots, traversals...)
    filepath : str
        Path to the output file

    Returns
    -------
    str
        The path written
    """
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(results, f, indent=2)
    return filepath
