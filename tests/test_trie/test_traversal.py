"""Tests for BitTrie traversal, show() and destroy()."""

import io
import random
from unittest.mock import MagicMock

import pytest

from iptrie.trie import BitTrie, Entry


class TestInOrder:
    """Tests for in-order traversal."""

    def test_ascending_keys(self):
        """Test entries come out in ascending key order."""
        trie = BitTrie()
        for key in (12, 0xFFFFFFFF, 10, 0, 11, 0x80000000):
            trie.insert(key, str(key))
        assert trie.keys() == [0, 10, 11, 12, 0x80000000, 0xFFFFFFFF]

    def test_random_insertion_order(self):
        """Test order holds for any insertion sequence."""
        rng = random.Random(7)
        keys = [rng.getrandbits(32) for _ in range(300)]
        keys += [k + 1 for k in keys[:50] if k < 0xFFFFFFFF]
        trie = BitTrie()
        for key in keys:
            trie.insert(key, None)
        assert trie.keys() == sorted(set(keys))

    def test_iteration_yields_entries(self):
        """Test iterating the trie yields Entry objects."""
        trie = BitTrie()
        trie.insert(2, "b")
        trie.insert(1, "a")
        assert list(trie) == [Entry(1, "a"), Entry(2, "b")]


class TestShow:
    """Tests for show()."""

    def test_default_format(self):
        """Test show() without a printer writes hex keys and reprs."""
        trie = BitTrie()
        trie.insert(0xFFFFFFFF, "high")
        trie.insert(0, "low")
        out = io.StringIO()
        trie.show(out)
        assert out.getvalue() == "keys:\n0x0: 'low'\n0xffffffff: 'high'\n"

    def test_custom_printer(self):
        """Test show() hands each entry and the stream to the printer."""
        printer = MagicMock()
        trie = BitTrie(show_entry=printer)
        trie.insert(20, "b")
        trie.insert(10, "a")
        out = io.StringIO()
        trie.show(out)

        assert printer.call_count == 2
        assert printer.call_args_list[0].args == (Entry(10, "a"), out)
        assert printer.call_args_list[1].args == (Entry(20, "b"), out)

    def test_empty_trie(self):
        """Test show() on an empty trie writes only the header."""
        out = io.StringIO()
        BitTrie().show(out)
        assert out.getvalue() == "keys:\n"

    def test_defaults_to_stdout(self, capsys):
        """Test show() writes to stdout when no stream is given."""
        trie = BitTrie()
        trie.insert(255, 1)
        trie.show()
        assert capsys.readouterr().out == "keys:\n0xff: 1\n"


class TestDestroy:
    """Tests for destroy()."""

    def test_release_called_once_per_value(self):
        """Test release callable sees every stored value exactly once."""
        release = MagicMock()
        trie = BitTrie(release_value=release)
        values = [object() for _ in range(25)]
        rng = random.Random(3)
        keys = rng.sample(range(1 << 32), len(values))
        for key, value in zip(keys, values):
            trie.insert(key, value)

        trie.destroy()

        assert release.call_count == len(values)
        released = [call.args[0] for call in release.call_args_list]
        assert len({id(v) for v in released}) == len(values)
        assert {id(v) for v in released} == {id(v) for v in values}

    def test_without_release(self):
        """Test destroy() works when no release callable was given."""
        trie = BitTrie()
        trie.insert(1, "one")
        trie.destroy()
        assert len(trie) == 0

    def test_trie_is_empty_afterwards(self):
        """Test destroy() resets root and counters."""
        trie = BitTrie()
        trie.insert(10, "a")
        trie.insert(11, "b")
        trie.destroy()

        assert (trie.size, trie.node_count, trie.height) == (0, 0, 0)
        assert trie.search(10) is None
        assert list(trie) == []

    def test_reuse_after_destroy(self):
        """Test a destroyed trie accepts new entries."""
        trie = BitTrie()
        trie.insert(10, "a")
        trie.destroy()
        trie.insert(10, "b")
        assert trie.search(10).value == "b"
        assert trie.height == 1

    def test_destroy_empty_trie(self):
        """Test destroying an empty trie releases nothing."""
        release = MagicMock()
        BitTrie(release_value=release).destroy()
        release.assert_not_called()

    def test_children_released_before_parents(self):
        """Test values are released in post-order (ascending for leaves)."""
        released = []
        trie = BitTrie(release_value=released.append)
        for key in (3, 1, 2, 0xFFFFFFFF):
            trie.insert(key, key)
        trie.destroy()
        assert released == [1, 2, 3, 0xFFFFFFFF]

    def test_release_errors_propagate(self):
        """Test an exception from the release callable is not swallowed."""
        def release(value):
            raise RuntimeError("cannot release")

        trie = BitTrie(release_value=release)
        trie.insert(1, "one")
        with pytest.raises(RuntimeError, match="cannot release"):
            trie.destroy()

    def test_failed_release_leaves_trie_empty(self):
        """Test a release error midway still leaves a consistent empty trie."""
        def release(value):
            if value == "b":
                raise RuntimeError("cannot release")

        trie = BitTrie(release_value=release)
        trie.insert(1, "a")
        trie.insert(0xFFFFFFFF, "b")
        with pytest.raises(RuntimeError):
            trie.destroy()

        assert (trie.size, trie.node_count, trie.height) == (0, 0, 0)
        assert trie.keys() == []
        assert trie.search(0) is None

        trie.insert(5, "c")
        assert trie.search(5).value == "c"
