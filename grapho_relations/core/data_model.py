"""
Sequential containers used by the graph traversals.

This module defines the first-in-first-out queue and the
last-in-first-out stack that the breadth-first and depth-first
searches use as work lists.
"""

from collections import deque

from ..pipeline_config import EmptyContainerError

__all__ = ['Queue', 'Stack']


class Queue:
    """
    A first-in, first-out container.
    """

    def __init__(self, items=None):
        """
        Initialize a Queue.

        Parameters
        ----------
        items : iterable, optional
            Elements to enqueue, front first
        """
        self._items = deque(items or ())

    def enqueue(self, item):
        """
        Add an element to the rear of the queue.

        Parameters
        ----------
        item : object
            Element to add
        """
        self._items.append(item)

    def dequeue(self):
        """
        Remove and return the element at the front of the queue.

        Returns
        -------
        object
            The front element

        Raises
        ------
        EmptyContainerError
            If the queue is empty
        """
        if not self._items:
            raise EmptyContainerError("dequeue from an empty queue")
        return self._items.popleft()

    def peek(self):
        """Return the front element without removing it."""
        if not self._items:
            raise EmptyContainerError("peek at an empty queue")
        return self._items[0]

    def is_empty(self):
        return not self._items

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return "[" + ", ".join(str(item) for item in self._items) + "]"


class Stack:
    """
    A last-in, first-out container.
    """

    def __init__(self):
        self._items = []

    def push(self, item):
        """
        Push an element onto the top of the stack.

        Parameters
        ----------
        item : object
            Element to push
        """
        self._items.append(item)

    def pop(self):
        """
        Pop the element from the top of the stack.

        Returns
        -------
        object
            The top element

        Raises
        ------
        EmptyContainerError
            If the stack is empty
        """
        if not self._items:
            raise EmptyContainerError("pop from an empty stack")
        return self._items.pop()

    def peek(self):
        """Return the top element without removing it."""
        if not self._items:
            raise EmptyContainerError("peek at an empty stack")
        return self._items[-1]

    def is_empty(self):
        return not self._items

    def unload_onto(self, receiver):
        """
        Move every element of this stack onto ``receiver``.

        Elements are popped one by one, so they land on ``receiver`` in
        reverse order and this stack ends up empty.

        Parameters
        ----------
        receiver : Stack
            Stack receiving the elements
        """
        while self._items:
            receiver.push(self._items.pop())

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"Stack(top={self._items[-1] if self._items else None}, size={len(self._items)})"
