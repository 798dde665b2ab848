"""Binary trie over unsigned 32-bit keys with nearest-key search.

Keys are consumed one bit at a time from the most significant bit. Paths
are only materialised as deep as needed to tell stored keys apart: a key
that diverges from everything else near the top sits in a shallow leaf,
and two keys sharing a long common prefix force a chain of branch points
down to the bit where they differ.

Search never fails on a non-empty trie. When the exact bit path runs out
the walk switches to a fallback direction and keeps descending until it
reaches a leaf, so a key lying between two stored keys resolves to one of
them. Storing both endpoints of a labelled range therefore lets any key
inside the range find one of the endpoints.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, TextIO, TypeVar

from iptrie.exceptions import KeyRangeError, TrieInvariantError
from .node import KEY_BITS, MAX_KEY, Entry, TrieNode, key_bit
from .protocols import EntryPrinter, FallbackMode, InsertResult, ValueReleaser

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class SearchResult(Generic[T]):
    """Outcome of a nearest-key walk.

    Attributes:
        key: The key that was searched for.
        entry: Closest stored entry, or None if the trie is empty.
        steps: Number of branch steps taken from the root.
        fallback: Fallback direction entered, or None if the walk
            followed the key's own bits all the way.
    """
    key: int
    entry: Optional[Entry[T]] = None
    steps: int = 0
    fallback: Optional[FallbackMode] = None

    @property
    def found(self) -> bool:
        """Return True if the walk reached an entry."""
        return self.entry is not None

    @property
    def exact(self) -> bool:
        """Return True if the entry's key equals the searched key."""
        return self.entry is not None and self.entry.key == self.key


class BitTrie(Generic[T]):
    """Binary trie answering "closest stored key" queries.

    Supports:
    - Insert a (key, value) pair; duplicates are rejected, never replaced
    - Nearest-key search in at most 32 branch steps
    - In-order traversal in ascending key order
    - Destruction with an optional per-value release callable

    Example:
        trie = BitTrie()
        trie.insert(0x0A000000, "range start")
        trie.insert(0x0A0000FF, "range end")

        trie.search(0x0A000000).value   # "range start"
        trie.search(0x0A000010).value   # one of the two endpoints
    """

    def __init__(
        self,
        show_entry: Optional[EntryPrinter] = None,
        release_value: Optional[ValueReleaser] = None,
    ):
        """Initialize an empty trie.

        Args:
            show_entry: Writes one entry to a stream; used by show().
                If None, show() writes the key in hex and the value's repr.
            release_value: Called once per stored value by destroy().
                If None, values are simply dropped.
        """
        self._root: Optional[TrieNode[T]] = None
        self._show_entry = show_entry
        self._release_value = release_value
        self._size = 0
        self._node_count = 0
        self._height = 0

    @property
    def size(self) -> int:
        """Number of entries stored."""
        return self._size

    @property
    def node_count(self) -> int:
        """Number of branch points created by splitting a leaf."""
        return self._node_count

    @property
    def height(self) -> int:
        """Depth of the deepest leaf created so far."""
        return self._height

    def __len__(self) -> int:
        """Return number of stored entries."""
        return self._size

    def __iter__(self) -> Iterator[Entry[T]]:
        return self.entries()

    def __contains__(self, key: int) -> bool:
        return self.contains(key)

    def __repr__(self) -> str:
        return (
            f"BitTrie(size={self._size}, node_count={self._node_count}, "
            f"height={self._height})"
        )

    def insert(self, key: int, value: T) -> InsertResult:
        """Store value under key unless key is already present.

        Walks down from the root one key bit per level. A leaf met on the
        way belongs to a key sharing the bits consumed so far; it is turned
        into a branch point by pushing its entry one level down, on the
        side given by the existing key's own bit.

        Args:
            key: Unsigned 32-bit key.
            value: Payload to store. The trie owns it only if the
                result is INSERTED.

        Returns:
            InsertResult.INSERTED for a new key, InsertResult.DUPLICATE
            if key was already stored (trie left unchanged).

        Raises:
            KeyRangeError: If key is not an unsigned 32-bit integer.
        """
        self._check_key(key)

        if self._root is None:
            root: TrieNode[T] = TrieNode(depth=0)
            root.set_child(key_bit(key, 0), TrieNode(depth=1, entry=Entry(key, value)))
            self._root = root
            self._size = 1
            self._height = 1
            return InsertResult.INSERTED

        node = self._root
        for depth in range(KEY_BITS):
            if node.is_leaf:
                if node.entry.key == key:
                    logger.debug(f"Rejected duplicate key 0x{key:08x}")
                    return InsertResult.DUPLICATE
                self._split(node)

            bit = key_bit(key, depth)
            child = node.child(bit)
            if child is None:
                leaf = TrieNode(depth=depth + 1, entry=Entry(key, value))
                node.set_child(bit, leaf)
                self._size += 1
                if leaf.depth > self._height:
                    self._height = leaf.depth
                return InsertResult.INSERTED
            node = child

        # Every bit consumed: only an identical key can end up here
        if node.is_leaf and node.entry.key == key:
            logger.debug(f"Rejected duplicate key 0x{key:08x}")
            return InsertResult.DUPLICATE
        raise TrieInvariantError(
            f"insert of 0x{key:08x} consumed all {KEY_BITS} bits without a match"
        )

    def _split(self, node: TrieNode[T]) -> None:
        """Turn a leaf into a branch point by pushing its entry one level down."""
        entry = node.entry
        child = TrieNode(depth=node.depth + 1, entry=entry)
        node.set_child(key_bit(entry.key, node.depth), child)
        node.entry = None
        self._node_count += 1
        logger.debug(f"Split leaf 0x{entry.key:08x} at depth {node.depth}")

    def search(self, key: int) -> Optional[Entry[T]]:
        """Find the stored entry closest to key.

        The returned entry's key equals key whenever key is stored;
        otherwise it is the entry reached by the fallback walk.

        Args:
            key: Unsigned 32-bit key.

        Returns:
            The closest entry, or None if the trie is empty.

        Raises:
            KeyRangeError: If key is not an unsigned 32-bit integer.
            TrieInvariantError: If the walk cannot reach any entry.
        """
        return self.explain(key).entry

    def explain(self, key: int) -> SearchResult[T]:
        """Run the nearest-key walk and report how it went.

        Follows the key's bits while the matching child exists. The first
        time it does not, the walk takes the other child and fixes a
        direction for the rest of the descent: LEFTMOST if the missing
        child was bit 0, RIGHTMOST if it was bit 1. From then on the key's
        bits are ignored and the preferred side is taken when present.

        Args:
            key: Unsigned 32-bit key.

        Returns:
            SearchResult with the entry, the number of steps taken and
            the fallback direction (if any).
        """
        self._check_key(key)

        if self._root is None:
            return SearchResult(key=key)

        node: Optional[TrieNode[T]] = self._root
        mode: Optional[FallbackMode] = None
        for depth in range(KEY_BITS):
            if node.is_leaf:
                return SearchResult(key=key, entry=node.entry, steps=depth, fallback=mode)

            if mode is FallbackMode.LEFTMOST:
                node = node.left if node.left is not None else node.right
            elif mode is FallbackMode.RIGHTMOST:
                node = node.right if node.right is not None else node.left
            else:
                bit = key_bit(key, depth)
                next_node = node.child(bit)
                if next_node is None:
                    next_node = node.child(1 - bit)
                    mode = FallbackMode.RIGHTMOST if bit else FallbackMode.LEFTMOST
                node = next_node

            if node is None:
                raise TrieInvariantError(
                    f"branch point at depth {depth} has no children"
                )

        if node.is_leaf:
            return SearchResult(key=key, entry=node.entry, steps=KEY_BITS, fallback=mode)
        raise TrieInvariantError(
            f"search for 0x{key:08x} consumed all {KEY_BITS} bits without reaching an entry"
        )

    def contains(self, key: int) -> bool:
        """Check if key is stored exactly.

        Args:
            key: Unsigned 32-bit key.

        Returns:
            True if an entry with this exact key exists.
        """
        return self.explain(key).exact

    def entries(self) -> Iterator[Entry[T]]:
        """Yield stored entries in ascending key order."""
        return _in_order(self._root)

    def keys(self) -> List[int]:
        """Return stored keys in ascending order."""
        return [entry.key for entry in self.entries()]

    def show(self, stream: Optional[TextIO] = None) -> None:
        """Write every entry in ascending key order.

        Uses the show_entry callable given at construction, or a
        "0x<key>: <value>" line per entry if there is none.

        Args:
            stream: Where to write (default: sys.stdout).
        """
        if stream is None:
            stream = sys.stdout
        stream.write("keys:\n")
        for entry in self.entries():
            if self._show_entry is not None:
                self._show_entry(entry, stream)
            else:
                stream.write(f"0x{entry.key:x}: {entry.value!r}\n")

    def destroy(self) -> None:
        """Release every stored value and drop all nodes.

        Calls release_value (if given) once per stored value, children
        before parents. The trie is emptied before any value is released,
        so it stays empty and reusable even if release_value raises.
        """
        root, self._root = self._root, None
        self._size = 0
        self._node_count = 0
        self._height = 0
        released = self._release(root)
        logger.debug(f"Destroyed trie, released {released} value(s)")

    def _release(self, node: Optional[TrieNode[T]]) -> int:
        if node is None:
            return 0
        count = self._release(node.left) + self._release(node.right)
        if node.is_leaf:
            if self._release_value is not None:
                self._release_value(node.entry.value)
            count += 1
        node.left = None
        node.right = None
        node.entry = None
        return count

    @staticmethod
    def _check_key(key: int) -> None:
        if isinstance(key, bool) or not isinstance(key, int):
            raise KeyRangeError(f"Key must be an integer, got {type(key).__name__}")
        if not 0 <= key <= MAX_KEY:
            raise KeyRangeError(f"Key out of 32-bit range: {key}")


def _in_order(node: Optional[TrieNode[T]]) -> Iterator[Entry[T]]:
    """Yield entries under node: left subtree, own entry, right subtree."""
    if node is None:
        return
    yield from _in_order(node.left)
    if node.is_leaf:
        yield node.entry
    yield from _in_order(node.right)
