"""
Relation graph data structures.

This module provides an immutable directed graph over totally ordered
vertex labels, with predicates for the usual properties of binary
relations, equivalence classes, root selection and breadth-first and
depth-first traversals.
"""

import logging
from typing import Dict, Hashable, Iterable, List, NamedTuple, Optional

from .data_model import Queue, Stack
from ..pipeline_config import GRAPH_CONFIG, TRAVERSAL_CONFIG
from ..utils.ordering import extra_recursion_depth, get_order_key, numeric_key

__all__ = ['Edge', 'RelationGraph']

logger = logging.getLogger(__name__)


class Edge(NamedTuple):
    """
    A directed edge from ``source`` to ``destination``.

    Two edges are equal when both endpoints are equal.
    """

    source: Hashable
    destination: Hashable

    @property
    def is_self_loop(self):
        return self.source == self.destination

    def reversed(self):
        """Return the edge pointing the other way."""
        return Edge(self.destination, self.source)


class RelationGraph:
    """
    A directed graph read as a binary relation over its vertices.

    The vertex and edge sets are fixed at construction. Every "sorted"
    result follows the order given by the ``key`` function, which by
    default reads numeric string labels as integers.
    """

    def __init__(self, vertices: Iterable, edges: Iterable, key=numeric_key, name: Optional[str] = None):
        """
        Initialize a RelationGraph.

        Parameters
        ----------
        vertices : iterable
            Vertex labels
        edges : iterable of Edge or (source, destination) tuples
            Directed edges between the vertices
        key : callable or str, optional
            Order key for vertex labels, or the name of one ('numeric', 'natural')
        name : str, optional
            Name of the graph
        """
        self.name = name
        self._vertices = frozenset(vertices)
        self._edges = frozenset(Edge(*edge) for edge in edges)
        self._key = get_order_key(key)

        endpoints = set()
        for edge in self._edges:
            endpoints.add(edge.source)
            endpoints.add(edge.destination)

        dangling = endpoints - self._vertices
        if dangling and GRAPH_CONFIG['warn_dangling_edges']:
            logger.warning(f"Edges reference {len(dangling)} unknown vertices: {sorted(map(str, dangling))}")

        # Order keys are computed once per label
        self._order: Dict[Hashable, object] = {v: self._key(v) for v in self._vertices | endpoints}

        successors = {v: [] for v in self._vertices}
        predecessors = {v: [] for v in self._vertices}
        for edge in self._edges:
            successors.setdefault(edge.source, []).append(edge.destination)
            predecessors.setdefault(edge.destination, []).append(edge.source)
        self._successors = {v: self.sort_vertices(dests) for v, dests in successors.items()}
        self._predecessors = {v: self.sort_vertices(srcs) for v, srcs in predecessors.items()}

        logger.debug(f"Built {self!r}")

    @property
    def vertices(self):
        return self._vertices

    @property
    def edges(self):
        return self._edges

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, vertex):
        return vertex in self._vertices

    def __repr__(self):
        label = f"name={self.name}, " if self.name else ""
        return f"RelationGraph({label}vertices={len(self._vertices)}, edges={len(self._edges)})"

    # -----------------
    # ORDERING AND ADJACENCY
    # -----------------

    def sort_vertices(self, vertices: Iterable) -> List:
        """
        Sort vertex labels ascending by the graph's order key.

        Parameters
        ----------
        vertices : iterable
            Labels to sort

        Returns
        -------
        list
            The sorted labels
        """
        return sorted(vertices, key=self._order_of)

    def _order_of(self, vertex):
        if vertex in self._order:
            return self._order[vertex]
        return self._key(vertex)

    def successors(self, vertex) -> List:
        """
        Get the destinations of the edges leaving a vertex.

        Parameters
        ----------
        vertex : hashable
            Source vertex

        Returns
        -------
        list
            Destinations in ascending order, empty for unknown vertices
        """
        return list(self._successors.get(vertex, ()))

    def predecessors(self, vertex) -> List:
        """Get the sources of the edges entering a vertex, in ascending order."""
        return list(self._predecessors.get(vertex, ()))

    def in_degree(self, vertex) -> int:
        return len(self._predecessors.get(vertex, ()))

    def out_degree(self, vertex) -> int:
        return len(self._successors.get(vertex, ()))

    # -----------------
    # RELATION PREDICATES
    # -----------------

    def is_reflexive(self) -> bool:
        """True if every vertex has a self-loop."""
        return all(Edge(vertex, vertex) in self._edges for vertex in self._vertices)

    def is_symmetric(self) -> bool:
        """True if every edge (a, b) has its reverse (b, a)."""
        return all(edge.reversed() in self._edges for edge in self._edges)

    def is_transitive(self) -> bool:
        """
        True if edges (a, b) and (b, c) always imply an edge (a, c).

        Every edge (a, b) is checked against every vertex c.
        """
        for edge in self._edges:
            for vertex in self._vertices:
                if (Edge(edge.destination, vertex) in self._edges
                        and Edge(edge.source, vertex) not in self._edges):
                    return False
        return True

    def is_antisymmetric(self) -> bool:
        """True if no two distinct vertices are related both ways."""
        for edge in self._edges:
            if not edge.is_self_loop and edge.reversed() in self._edges:
                return False
        return True

    def is_equivalence(self) -> bool:
        return self.is_reflexive() and self.is_symmetric() and self.is_transitive()

    # -----------------
    # EQUIVALENCE CLASSES AND ROOTS
    # -----------------

    def equivalence_class_of(self, vertex) -> List:
        """
        Get the equivalence class of a vertex.

        Parameters
        ----------
        vertex : hashable
            Member of the class

        Returns
        -------
        list
            Vertices related to ``vertex`` in ascending order, or an empty
            list if the graph is not an equivalence relation
        """
        if not self.is_equivalence():
            return []
        return self.successors(vertex)

    def equivalence_classes(self) -> List[List]:
        """
        Partition the vertices into equivalence classes.

        Returns
        -------
        list of list
            Classes sorted internally and by their minimum vertex, or an
            empty list if the graph is not an equivalence relation
        """
        if not self.is_equivalence():
            return []
        return self._partition()

    def _partition(self):
        classes = []
        seen = set()
        for vertex in self.sort_vertices(self._vertices):
            if vertex in seen:
                continue
            members = self.successors(vertex)
            seen.update(members)
            classes.append(members)
        return classes

    def roots(self) -> List:
        """
        Get the vertices the traversals start from.

        These are the vertices with no incoming edge and, when the graph
        is an equivalence relation, the minimum of every class.

        Returns
        -------
        list
            Root vertices in ascending order
        """
        roots = {vertex for vertex in self._vertices if not self._predecessors.get(vertex)}
        if self.is_equivalence():
            roots.update(members[0] for members in self._partition())
        return self.sort_vertices(roots)

    # -----------------
    # TRAVERSALS
    # -----------------

    def iterative_breadth_first_search(self) -> List:
        """
        Breadth-first order of the vertices, starting from each root in turn.

        Returns
        -------
        list
            Vertices in the order they are first reached
        """
        visited = set()
        order = []
        for root in self.roots():
            if root in visited:
                continue
            queue = self._start_breadth_first(root, visited, order)
            while not queue.is_empty():
                self._expand_breadth_first(queue.dequeue(), queue, visited, order)
        return order

    def recursive_breadth_first_search(self) -> List:
        """
        Breadth-first order computed with one recursive call per dequeued vertex.

        Returns the same sequence as :meth:`iterative_breadth_first_search`.
        """
        visited = set()
        order = []
        with extra_recursion_depth(self._recursion_budget()):
            for root in self.roots():
                if root in visited:
                    continue
                queue = self._start_breadth_first(root, visited, order)
                self._breadth_first_step(queue, visited, order)
        return order

    def iterative_depth_first_search(self) -> List:
        """
        Depth-first order of the vertices, smallest successor first.

        Returns
        -------
        list
            Vertices in the order they are first reached
        """
        visited = set()
        order = []
        for root in self.roots():
            if root in visited:
                continue
            stack = Stack()
            stack.push(root)
            while not stack.is_empty():
                self._expand_depth_first(stack.pop(), stack, visited, order)
        return order

    def recursive_depth_first_search(self) -> List:
        """
        Depth-first order computed with one recursive call per popped vertex.

        Returns the same sequence as :meth:`iterative_depth_first_search`.
        """
        visited = set()
        order = []
        with extra_recursion_depth(self._recursion_budget()):
            for root in self.roots():
                if root in visited:
                    continue
                stack = Stack()
                stack.push(root)
                self._depth_first_step(stack, visited, order)
        return order

    def _start_breadth_first(self, root, visited, order):
        visited.add(root)
        order.append(root)
        return Queue([root])

    def _expand_breadth_first(self, vertex, queue, visited, order):
        for destination in self._successors.get(vertex, ()):
            if destination not in visited:
                visited.add(destination)
                order.append(destination)
                queue.enqueue(destination)

    def _breadth_first_step(self, queue, visited, order):
        if queue.is_empty():
            return
        self._expand_breadth_first(queue.dequeue(), queue, visited, order)
        self._breadth_first_step(queue, visited, order)

    def _expand_depth_first(self, vertex, stack, visited, order):
        if vertex in visited:
            return
        visited.add(vertex)
        order.append(vertex)

        # Drained in reverse so the smallest successor ends up on top
        holding = Stack()
        for destination in self._successors.get(vertex, ()):
            if destination not in visited:
                holding.push(destination)
        holding.unload_onto(stack)

    def _depth_first_step(self, stack, visited, order):
        if stack.is_empty():
            return
        self._expand_depth_first(stack.pop(), stack, visited, order)
        self._depth_first_step(stack, visited, order)

    def _recursion_budget(self):
        # Each pushed or enqueued vertex costs one frame
        return len(self._vertices) + len(self._edges) + TRAVERSAL_CONFIG['recursion_headroom']
