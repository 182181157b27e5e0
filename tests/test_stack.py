import pytest

from pcbgcode.stack import (
    EMPTY_STACK,
    StringStack,
    record_pop,
    record_push,
    record_top,
)


def test_push_pop_is_lifo():
    stack = StringStack()
    for item in ["aaa", "bbb", "ccc"]:
        stack.push(item)
    assert [stack.pop() for _ in range(3)] == ["ccc", "bbb", "aaa"]


def test_pop_empty_returns_sentinel():
    assert StringStack().pop() == EMPTY_STACK


def test_len_elem_and_iter():
    stack = StringStack(["x", "y"])
    stack.push("z")
    assert len(stack) == 3
    assert stack.elem(0) == "x"
    assert list(stack) == ["x", "y", "z"]


def test_sort():
    stack = StringStack(["ccc", "aaa", "bbb"])
    stack.sort()
    assert list(stack) == ["aaa", "bbb", "ccc"]


def test_clear():
    stack = StringStack(["a", "b"])
    stack.clear()
    assert len(stack) == 0
    assert stack.pop() == EMPTY_STACK


def test_record_stack_round_trip():
    t = ""
    t = record_push(t, "aaa")
    t = record_push(t, "bbb")
    t = record_push(t, "ccc")
    assert record_top(t) == "ccc"
    t = record_pop(t)
    assert record_top(t) == "bbb"
    t = record_push(t, "ddd")
    assert record_top(t) == "ddd"
    assert t == record_push(record_push(record_push("", "aaa"), "bbb"), "ddd")


def test_record_pop_to_empty():
    assert record_pop(record_push("", "aaa")) == ""


def test_record_empty_raises():
    with pytest.raises(IndexError):
        record_top("")
    with pytest.raises(IndexError):
        record_pop("")