"""
Metrics for relation graphs.

This module computes summary counts, degree tables and adjacency
matrices for a RelationGraph, and reports which edges are missing for
the graph to be reflexive, symmetric or transitive.
"""

import numpy as np
import networkx as nx
import pandas as pd

from ..core.graph import Edge
from ..io.exporters import to_networkx

__all__ = ['RelationMetrics']


class RelationMetrics:
    """
    Calculator of metrics for a RelationGraph.

    The networkx view and the vertex order are computed once, when the
    calculator is created.
    """

    def __init__(self, graph):
        """
        Initialize the calculator.

        Parameters
        ----------
        graph : RelationGraph
            Graph to analyse
        """
        self.relation = graph
        self.graph = to_networkx(graph)
        self.vertex_order = graph.sort_vertices(graph.vertices)

        self.n = len(graph.vertices)
        self.m = len(graph.edges)

    def basic_metrics(self):
        """
        Calculate basic counts of the graph.

        Returns
        -------
        dict
            Number of vertices, edges and self-loops, density, roots and
            weakly connected components
        """
        g = self.graph
        metrics = {
            'num_vertices': self.n,
            'num_edges': self.m,
            'num_self_loops': nx.number_of_selfloops(g),
            'density': nx.density(g),
            'relation_density': self.m / (self.n * self.n) if self.n > 0 else 0,
            'num_roots': len(self.relation.roots()),
        }
        metrics['weakly_connected_components'] = (
            nx.number_weakly_connected_components(g) if self.n > 0 else 0
        )
        return metrics

    def relation_properties(self):
        """Evaluate every relation predicate of the graph."""
        graph = self.relation
        return {
            'reflexive': graph.is_reflexive(),
            'symmetric': graph.is_symmetric(),
            'transitive': graph.is_transitive(),
            'antisymmetric': graph.is_antisymmetric(),
            'equivalence': graph.is_equivalence(),
        }

    def degree_table(self):
        """
        Build a table of vertex degrees.

        Returns
        -------
        DataFrame
            Indexed by vertex in graph order, with ``in_degree``,
            ``out_degree``, ``self_loop`` and ``is_root`` columns
        """
        roots = set(self.relation.roots())
        edges = self.relation.edges
        df = pd.DataFrame({
            'in_degree': [self.relation.in_degree(v) for v in self.vertex_order],
            'out_degree': [self.relation.out_degree(v) for v in self.vertex_order],
            'self_loop': [Edge(v, v) in edges for v in self.vertex_order],
            'is_root': [v in roots for v in self.vertex_order],
        }, index=pd.Index(self.vertex_order, name='vertex'))
        return df

    def adjacency_matrix(self):
        """
        Build the 0/1 adjacency matrix of the relation.

        Returns
        -------
        numpy.ndarray
            Square integer matrix; row and column ``i`` stand for
            ``vertex_order[i]``
        """
        if self.n == 0:
            return np.zeros((0, 0), dtype=int)
        return nx.to_numpy_array(self.graph, nodelist=self.vertex_order, dtype=int)

    def matrix_properties(self):
        """
        Evaluate reflexivity, symmetry and transitivity on the adjacency matrix.

        Returns
        -------
        dict
            Same keys as the matching entries of :meth:`relation_properties`
        """
        A = self.adjacency_matrix().astype(bool)
        composed = (A.astype(int) @ A.astype(int)) > 0
        return {
            'reflexive': bool(np.all(np.diag(A))),
            'symmetric': bool(np.array_equal(A, A.T)),
            'transitive': bool(np.all(~composed | A)),
        }

    def missing_reflexive_edges(self):
        """Self-loops that are absent, in vertex order."""
        edges = self.relation.edges
        return [Edge(v, v) for v in self.vertex_order if Edge(v, v) not in edges]

    def missing_symmetric_edges(self):
        """Reverse edges that are absent, sorted by source then destination."""
        edges = self.relation.edges
        missing = {edge.reversed() for edge in edges if edge.reversed() not in edges}
        return self._sort_edges(missing)

    def missing_transitive_edges(self):
        """
        Edges the transitive closure adds to the graph.

        Returns
        -------
        list of Edge
            Empty exactly when the graph is transitive
        """
        closure = nx.transitive_closure(self.graph, reflexive=False)
        missing = {Edge(u, v) for u, v in closure.edges()} - set(self.relation.edges)
        return self._sort_edges(missing)

    def compute_all_metrics(self):
        """
        Calculate every metric that can be serialised to JSON.

        Returns
        -------
        dict
            Basic metrics, properties and missing-edge counts
        """
        return {
            'basic': self.basic_metrics(),
            'properties': self.relation_properties(),
            'missing_edges': {
                'reflexive': len(self.missing_reflexive_edges()),
                'symmetric': len(self.missing_symmetric_edges()),
                'transitive': len(self.missing_transitive_edges()),
            },
        }

    def _sort_edges(self, edges):
        order = {v: i for i, v in enumerate(self.relation.sort_vertices(
            {e.source for e in edges} | {e.destination for e in edges}))}
        return sorted(edges, key=lambda e: (order[e.source], order[e.destination]))
