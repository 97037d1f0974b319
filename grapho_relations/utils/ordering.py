"""
Ordering helpers for vertex labels.

Vertex labels are usually strings holding base-10 integers. They are
ordered numerically, so ``"2"`` comes before ``"10"``.
"""

import sys
from contextlib import contextmanager

__all__ = ['numeric_key', 'natural_key', 'ORDER_KEYS', 'get_order_key',
           'sort_vertices', 'extra_recursion_depth']


def numeric_key(label):
    """
    Order key that reads numeric strings as integers.

    Parameters
    ----------
    label : str or int
        Vertex label

    Returns
    -------
    int or object
        ``int(label)`` for numeric strings, the label itself otherwise
    """
    if isinstance(label, str):
        try:
            return int(label)
        except ValueError:
            return label
    return label


def natural_key(label):
    """Order key that keeps the label as it is."""
    return label


ORDER_KEYS = {
    'numeric': numeric_key,
    'natural': natural_key,
}


def get_order_key(name):
    """
    Look up an order key by name.

    Parameters
    ----------
    name : str or callable
        'numeric', 'natural', or an already callable key

    Returns
    -------
    callable
        The key function
    """
    if callable(name):
        return name
    if name not in ORDER_KEYS:
        raise ValueError(f"Unknown vertex order '{name}', expected one of {sorted(ORDER_KEYS)}")
    return ORDER_KEYS[name]


def sort_vertices(vertices, key=numeric_key):
    """Sort vertex labels ascending by ``key``."""
    return sorted(vertices, key=key)


@contextmanager
def extra_recursion_depth(extra):
    """
    Temporarily raise the interpreter recursion limit by ``extra`` frames.

    The previous limit is restored on exit.
    """
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(previous + extra)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
