"""Exception classes raised by the trie engine."""


class TrieError(Exception):
    """Base class for trie errors."""
    pass


class KeyRangeError(TrieError, ValueError):
    """Key is not an unsigned 32-bit integer."""
    pass


class TrieInvariantError(TrieError):
    """The trie structure is inconsistent.

    Raised when a walk consumes every key bit without reaching an entry.
    This indicates a defect in the trie itself, never a bad caller input.
    """
    pass
