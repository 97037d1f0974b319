"""
Functions for loading relation graphs from various formats.
"""

import os
import json
import logging

import pandas as pd

from ..core.graph import RelationGraph
from ..pipeline_config import GRAPH_CONFIG, GraphLoadError

__all__ = ['graph_from_dataframe', 'graph_from_networkx', 'load_graph_csv',
           'load_graph_json', 'load_graph']

logger = logging.getLogger(__name__)


def graph_from_dataframe(edges_df, vertices=None, source_col=None, destination_col=None,
                         key=None, name=None):
    """
    Build a RelationGraph from an edge-list DataFrame.

    Parameters
    ----------
    edges_df : DataFrame
        One row per edge
    vertices : iterable, optional
        Extra vertex labels; edge endpoints are always included
    source_col : str, optional
        Column holding edge sources (default from GRAPH_CONFIG)
    destination_col : str, optional
        Column holding edge destinations (default from GRAPH_CONFIG)
    key : callable or str, optional
        Vertex order (default from GRAPH_CONFIG)
    name : str, optional
        Name of the graph

    Returns
    -------
    RelationGraph
        The loaded graph
    """
    source_col = source_col or GRAPH_CONFIG['source_column']
    destination_col = destination_col or GRAPH_CONFIG['destination_column']

    for col in (source_col, destination_col):
        if col not in edges_df.columns:
            raise GraphLoadError(f"Required column '{col}' not found in edge list")

    edges_df = edges_df.dropna(subset=[source_col, destination_col])
    edges = list(zip(edges_df[source_col].astype(str).str.strip(),
                     edges_df[destination_col].astype(str).str.strip()))

    vertex_set = {str(v).strip() for v in vertices} if vertices is not None else set()
    for source, destination in edges:
        vertex_set.add(source)
        vertex_set.add(destination)

    return RelationGraph(vertex_set, edges, key=key or GRAPH_CONFIG['order'], name=name)


def graph_from_networkx(nx_graph, key=None, name=None):
    """
    Build a RelationGraph from a networkx graph.

    Node labels are converted to strings. Undirected graphs are read as
    symmetric relations.

    Parameters
    ----------
    nx_graph : networkx.Graph or networkx.DiGraph
        Source graph
    key : callable or str, optional
        Vertex order (default from GRAPH_CONFIG)
    name : str, optional
        Name of the graph (defaults to the networkx graph name)

    Returns
    -------
    RelationGraph
        The converted graph
    """
    if not nx_graph.is_directed():
        nx_graph = nx_graph.to_directed()

    vertices = {str(node) for node in nx_graph.nodes}
    edges = {(str(u), str(v)) for u, v in nx_graph.edges()}
    return RelationGraph(vertices, edges, key=key or GRAPH_CONFIG['order'],
                         name=name or nx_graph.graph.get('name') or None)


def load_graph_csv(edges_path, vertices_path=None, source_col=None, destination_col=None,
                   vertex_col=None, key=None, name=None):
    """
    Load a RelationGraph from CSV files.

    Parameters
    ----------
    edges_path : str
        CSV file with one edge per row
    vertices_path : str, optional
        CSV file with one vertex per row, for vertices without edges
    source_col : str, optional
        Column holding edge sources
    destination_col : str, optional
        Column holding edge destinations
    vertex_col : str, optional
        Column of the vertex file holding the labels
    key : callable or str, optional
        Vertex order
    name : str, optional
        Name of the graph (defaults to the edge file name)

    Returns
    -------
    RelationGraph
        The loaded graph
    """
    if not os.path.exists(edges_path):
        raise FileNotFoundError(f"File not found: {edges_path}")

    try:
        edges_df = pd.read_csv(edges_path, dtype=str)
    except Exception as e:
        raise GraphLoadError(f"Error reading CSV file: {e}")

    vertices = None
    if vertices_path is not None:
        if not os.path.exists(vertices_path):
            raise FileNotFoundError(f"File not found: {vertices_path}")
        vertex_col = vertex_col or GRAPH_CONFIG['vertex_column']
        vertices_df = pd.read_csv(vertices_path, dtype=str)
        if vertex_col not in vertices_df.columns:
            raise GraphLoadError(f"Required column '{vertex_col}' not found in CSV file")
        vertices = vertices_df[vertex_col].dropna().tolist()

    if name is None:
        name = os.path.splitext(os.path.basename(edges_path))[0]

    graph = graph_from_dataframe(edges_df, vertices=vertices, source_col=source_col,
                                 destination_col=destination_col, key=key, name=name)
    logger.info(f"Loaded {graph!r} from {edges_path}")
    return graph


def load_graph_json(filepath, key=None, name=None):
    """
    Load a RelationGraph from a JSON document.

    The document holds a ``vertices`` list and an ``edges`` list whose
    items are either ``[source, destination]`` pairs or objects with
    ``source`` and ``destination`` fields.

    Parameters
    ----------
    filepath : str
        Path to the JSON file
    key : callable or str, optional
        Vertex order
    name : str, optional
        Name of the graph (defaults to the document's ``name`` field)

    Returns
    -------
    RelationGraph
        The loaded graph
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphLoadError(f"Invalid JSON in {filepath}: {e}")

    if not isinstance(document, dict) or 'edges' not in document:
        raise GraphLoadError(f"{filepath} must hold an object with an 'edges' list")

    source_col = GRAPH_CONFIG['source_column']
    destination_col = GRAPH_CONFIG['destination_column']
    edges = []
    for item in document['edges']:
        if isinstance(item, dict):
            if source_col not in item or destination_col not in item:
                raise GraphLoadError(f"Edge {item} lacks '{source_col}' or '{destination_col}'")
            edges.append((str(item[source_col]), str(item[destination_col])))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            edges.append((str(item[0]), str(item[1])))
        else:
            raise GraphLoadError(f"Unsupported edge entry: {item!r}")

    vertices = {str(v) for v in document.get('vertices', [])}
    for source, destination in edges:
        vertices.add(source)
        vertices.add(destination)

    graph = RelationGraph(vertices, edges, key=key or GRAPH_CONFIG['order'],
                          name=name or document.get('name'))
    logger.info(f"Loaded {graph!r} from {filepath}")
    return graph


def load_graph(filepath, **kwargs):
    """
    Load a RelationGraph, choosing the reader from the file extension.

    Parameters
    ----------
    filepath : str
        Path to a ``.csv`` or ``.json`` file
    **kwargs
        Passed on to the reader

    Returns
    -------
    RelationGraph
        The loaded graph
    """
    _, ext = os.path.splitext(filepath)

    if ext.lower() == '.csv':
        return load_graph_csv(filepath, **kwargs)
    elif ext.lower() == '.json':
        return load_graph_json(filepath, **kwargs)
    else:
        raise GraphLoadError(f"Unsupported file format: {ext}")
