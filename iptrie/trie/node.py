"""Node and entry types for the binary trie."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar('T')

KEY_BITS = 32
MAX_KEY = (1 << KEY_BITS) - 1


def key_bit(key: int, depth: int) -> int:
    """Return the bit of key that a node at depth branches on.

    Depth 0 (the root) branches on bit 31, depth 31 on bit 0.
    """
    return (key >> (KEY_BITS - 1 - depth)) & 1


@dataclass
class Entry(Generic[T]):
    """A stored (key, value) pair.

    Attributes:
        key: Unsigned 32-bit key.
        value: Opaque caller payload.
    """
    key: int
    value: T


@dataclass
class TrieNode(Generic[T]):
    """Node in a binary trie.

    A node is either a leaf (entry set, no children) or a branch point
    (entry None, one or two children). Both are set only while an insert
    is pushing the entry down.

    Attributes:
        depth: Number of key bits consumed to reach this node.
        entry: Entry held directly by this node, if it is a leaf.
        left: Child for bit 0.
        right: Child for bit 1.
    """
    depth: int
    entry: Optional[Entry[T]] = None
    left: Optional['TrieNode[T]'] = None
    right: Optional['TrieNode[T]'] = None

    @property
    def is_leaf(self) -> bool:
        """Return True if this node holds an entry."""
        return self.entry is not None

    def child(self, bit: int) -> Optional['TrieNode[T]']:
        """Return the child on the given side (0 = left, 1 = right)."""
        return self.right if bit else self.left

    def set_child(self, bit: int, node: 'TrieNode[T]') -> None:
        """Attach node on the given side (0 = left, 1 = right)."""
        if bit:
            self.right = node
        else:
            self.left = node
