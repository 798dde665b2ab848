"""Enums and callback protocols shared by the trie engine.

This module defines the result types returned by trie operations and
the shapes of the optional callables a trie is constructed with.
"""

from enum import Enum, auto
from typing import Any, Protocol, TextIO, runtime_checkable


class InsertResult(Enum):
    """Outcome of BitTrie.insert().

    On DUPLICATE the trie did not take the value; the caller still owns it.
    """
    INSERTED = auto()    # New entry stored
    DUPLICATE = auto()   # Key already present, trie unchanged


class FallbackMode(Enum):
    """Direction bias used once a search loses the exact bit path."""
    LEFTMOST = auto()    # Prefer bit 0 children (smallest key in subtree)
    RIGHTMOST = auto()   # Prefer bit 1 children (largest key in subtree)


@runtime_checkable
class EntryPrinter(Protocol):
    """Callable used by BitTrie.show() to write one entry."""

    def __call__(self, entry: Any, stream: TextIO) -> None:
        """Write a formatted representation of entry to stream.

        Args:
            entry: The Entry being shown.
            stream: Text stream to write to.
        """
        ...


@runtime_checkable
class ValueReleaser(Protocol):
    """Callable used by BitTrie.destroy() to release a stored value."""

    def __call__(self, value: Any) -> None:
        ...
