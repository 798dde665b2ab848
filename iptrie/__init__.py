"""Nearest-key binary trie over 32-bit integer keys.

The trie engine lives in :mod:`iptrie.trie`; :mod:`iptrie.places` is the
address-to-place lookup tool built on top of it.
"""

from .exceptions import TrieError, KeyRangeError, TrieInvariantError
from .trie import BitTrie, Entry, InsertResult

__version__ = '0.1.0'

__all__ = [
    'BitTrie',
    'Entry',
    'InsertResult',
    'TrieError',
    'KeyRangeError',
    'TrieInvariantError',
]
