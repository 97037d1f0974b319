"""
Functions for visualizing relation graphs.
"""

import matplotlib.pyplot as plt
import networkx as nx

from ..io.exporters import to_networkx

__all__ = ['graph_layout', 'plot_relation_graph', 'plot_traversal_order']

LAYOUTS = {
    'spring': lambda G: nx.spring_layout(G, seed=42),
    'circular': nx.circular_layout,
    'shell': nx.shell_layout,
}


def graph_layout(G, layout='spring'):
    """
    Compute node positions for a networkx graph.

    Parameters
    ----------
    G : networkx.DiGraph
        Graph to lay out
    layout : str, optional
        One of 'spring', 'circular', 'shell'

    Returns
    -------
    dict
        Node to (x, y) position
    """
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown layout '{layout}', expected one of {sorted(LAYOUTS)}")
    if G.number_of_nodes() == 0:
        return {}
    return LAYOUTS[layout](G)


def plot_relation_graph(graph, figsize=(8, 8), node_size=500, node_color='lightblue',
                        root_color='orange', edge_color='gray', highlight_roots=True,
                        layout='spring', title=None, ax=None):
    """
    Plot a RelationGraph with its vertices labelled.

    Parameters
    ----------
    graph : RelationGraph
        Graph to plot
    figsize : tuple, optional
        Figure size (width, height) in inches
    node_size : int or float, optional
        Size of nodes
    node_color : str, optional
        Color of non-root nodes
    root_color : str, optional
        Color of root nodes when ``highlight_roots`` is set
    edge_color : str, optional
        Color of edges
    highlight_roots : bool, optional
        Whether to draw the roots in ``root_color``
    layout : str, optional
        Node layout, see :func:`graph_layout`
    title : str, optional
        Plot title
    ax : matplotlib.axes.Axes, optional
        Axes to plot on

    Returns
    -------
    matplotlib.axes.Axes
        The axes containing the plot
    """
    G = to_networkx(graph)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    pos = graph_layout(G, layout)

    roots = set(graph.roots()) if highlight_roots else set()
    colors = [root_color if node in roots else node_color for node in G.nodes]

    nx.draw_networkx_nodes(G, pos, ax=ax, node_size=node_size, node_color=colors)
    nx.draw_networkx_edges(G, pos, ax=ax, edge_color=edge_color, arrows=True,
                           node_size=node_size)
    nx.draw_networkx_labels(G, pos, ax=ax)

    if title:
        ax.set_title(title)
    else:
        ax.set_title(f'Graph: {graph.name}' if graph.name else 'Graph')

    ax.set_axis_off()
    return ax


def plot_traversal_order(graph, order, figsize=(8, 8), node_size=500, cmap='viridis',
                         layout='spring', title=None, ax=None):
    """
    Plot a RelationGraph coloured and labelled by visiting position.

    Parameters
    ----------
    graph : RelationGraph
        Graph to plot
    order : list
        Vertices in visiting order, as returned by a traversal
    figsize : tuple, optional
        Figure size (width, height) in inches
    node_size : int or float, optional
        Size of nodes
    cmap : str or matplotlib.colors.Colormap, optional
        Colormap for the visiting position
    layout : str, optional
        Node layout, see :func:`graph_layout`
    title : str, optional
        Plot title
    ax : matplotlib.axes.Axes, optional
        Axes to plot on

    Returns
    -------
    matplotlib.axes.Axes
        The axes containing the plot
    """
    G = to_networkx(graph)
    position = {vertex: i for i, vertex in enumerate(order)}

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    pos = graph_layout(G, layout)

    # Unvisited vertices get position -1
    values = [position.get(node, -1) for node in G.nodes]
    labels = {node: f"{node}\n#{position[node] + 1}" if node in position else str(node)
              for node in G.nodes}

    nx.draw_networkx_nodes(G, pos, ax=ax, node_size=node_size, node_color=values,
                           cmap=cmap, vmin=-1, vmax=max(len(order) - 1, 0))
    nx.draw_networkx_edges(G, pos, ax=ax, edge_color='gray', arrows=True, node_size=node_size)
    nx.draw_networkx_labels(G, pos, labels=labels, ax=ax, font_size=8)

    ax.set_title(title or 'Traversal order')
    ax.set_axis_off()
    return ax
