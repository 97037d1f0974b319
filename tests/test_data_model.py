"""
Tests for the Queue and Stack containers.
"""

import pytest

from grapho_relations.core.data_model import Queue, Stack
from grapho_relations.pipeline_config import EmptyContainerError


def test_queue_is_first_in_first_out():
    queue = Queue()
    for item in ("a", "b", "c"):
        queue.enqueue(item)

    assert len(queue) == 3
    assert queue.peek() == "a"
    assert [queue.dequeue() for _ in range(3)] == ["a", "b", "c"]
    assert queue.is_empty()


def test_queue_initial_items_and_repr():
    queue = Queue([1, 2, 3])
    assert repr(queue) == "[1, 2, 3]"
    assert repr(Queue()) == "[]"


def test_empty_queue_raises():
    queue = Queue()
    with pytest.raises(EmptyContainerError):
        queue.dequeue()
    with pytest.raises(IndexError):
        queue.peek()


def test_stack_is_last_in_first_out():
    stack = Stack()
    for item in (1, 2, 3):
        stack.push(item)

    assert len(stack) == 3
    assert stack.peek() == 3
    assert [stack.pop() for _ in range(3)] == [3, 2, 1]
    assert stack.is_empty()


def test_empty_stack_raises():
    stack = Stack()
    with pytest.raises(EmptyContainerError):
        stack.pop()
    with pytest.raises(EmptyContainerError):
        stack.peek()


def test_unload_onto_reverses_order():
    holding = Stack()
    for item in (1, 2, 3):
        holding.push(item)

    receiver = Stack()
    receiver.push("bottom")
    holding.unload_onto(receiver)

    assert holding.is_empty()
    assert len(receiver) == 4
    assert [receiver.pop() for _ in range(4)] == [1, 2, 3, "bottom"]


def test_stack_repr():
    stack = Stack()
    assert repr(stack) == "Stack(top=None, size=0)"
    stack.push("x")
    assert repr(stack) == "Stack(top=x, size=1)"
