"""A stack of strings, and a stack kept as newline-separated records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

EMPTY_STACK = "EMPTY-STACK"
RECORD_SEP = "\n"


class StringStack:
    """A last-in, first-out stack of strings."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: list[str] = list(items)

    def push(self, item: str) -> None:
        """Put ``item`` on top of the stack."""
        self._items.append(item)

    def pop(self) -> str:
        """Remove and return the top item, or ``EMPTY_STACK`` when empty."""
        if self._items:
            return self._items.pop()
        return EMPTY_STACK

    def elem(self, n: int) -> str:
        """The item at position ``n``, counted from the bottom."""
        return self._items[n]

    def sort(self) -> None:
        """Sort the items in place."""
        self._items.sort()

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)


def _entries(stack: str) -> list[str]:
    entries = stack.split(RECORD_SEP)
    if entries and entries[-1] == "":
        entries.pop()
    return entries


def record_push(stack: str, entry: str) -> str:
    """Return ``stack`` with ``entry`` added on top."""
    return stack + entry + RECORD_SEP


def record_top(stack: str) -> str:
    """The top entry of ``stack``."""
    entries = _entries(stack)
    if not entries:
        raise IndexError("top of an empty stack")
    return entries[-1]


def record_pop(stack: str) -> str:
    """Return ``stack`` without its top entry."""
    entries = _entries(stack)
    if not entries:
        raise IndexError("pop from an empty stack")
    return "".join(entry + RECORD_SEP for entry in entries[:-1])