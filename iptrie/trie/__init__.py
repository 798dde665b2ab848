"""Binary trie engine for nearest-key lookup over 32-bit keys.

- BitTrie: the trie itself (insert, search, traversal, destroy)
- TrieNode / Entry: node and stored-pair types
- InsertResult / FallbackMode: operation outcomes

Example:
    from iptrie.trie import BitTrie, InsertResult

    trie = BitTrie()
    assert trie.insert(0x0A000000, "start") is InsertResult.INSERTED
    entry = trie.search(0x0A000001)
"""

from .protocols import InsertResult, FallbackMode, EntryPrinter, ValueReleaser
from .node import Entry, TrieNode, KEY_BITS, MAX_KEY, key_bit
from .bintrie import BitTrie, SearchResult

__all__ = [
    # Protocols and enums
    'InsertResult',
    'FallbackMode',
    'EntryPrinter',
    'ValueReleaser',
    # Data structures
    'Entry',
    'TrieNode',
    'KEY_BITS',
    'MAX_KEY',
    'key_bit',
    # Main trie
    'BitTrie',
    'SearchResult',
]
