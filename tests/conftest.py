"""
Shared fixtures for the relation graph tests.
"""

import random

import matplotlib
matplotlib.use("Agg")

import pytest

from grapho_relations.core.graph import RelationGraph


@pytest.fixture
def chain_graph():
    """1 -> 2 -> 3"""
    return RelationGraph({"1", "2", "3"}, {("1", "2"), ("2", "3")}, name="chain")


@pytest.fixture
def branching_graph():
    """
    Small tree:
          1
         / \\
        2   3
        |
        4
    """
    return RelationGraph({"1", "2", "3", "4"}, {("1", "2"), ("1", "3"), ("2", "4")})


@pytest.fixture
def equivalence_graph():
    """Classes {1, 2} and {3}."""
    return RelationGraph(
        {"1", "2", "3"},
        {("1", "1"), ("2", "2"), ("3", "3"), ("1", "2"), ("2", "1")},
        name="equivalence",
    )


@pytest.fixture
def cyclic_graph():
    """
    0 -> 1, with cycles 1 -> 2 -> 4 -> 1 and 3 <-> 5:
        0 -> 1 -> 2 -> 4
             |^---------'
             v
             3 <-> 5
    """
    return RelationGraph(
        {str(i) for i in range(6)},
        {("0", "1"), ("1", "2"), ("1", "3"), ("2", "4"), ("4", "1"), ("3", "5"), ("5", "3")},
    )


@pytest.fixture
def make_random_graph():
    """Factory of reproducible random graphs over numeric labels."""
    def _make(seed, num_vertices=8, edge_probability=0.25):
        rng = random.Random(seed)
        vertices = [str(i) for i in range(1, num_vertices + 1)]
        edges = {(a, b) for a in vertices for b in vertices if rng.random() < edge_probability}
        return RelationGraph(vertices, edges, name=f"random_{seed}")
    return _make
