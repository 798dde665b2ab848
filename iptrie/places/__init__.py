"""Address-to-place lookup built on the binary trie.

Reads a delimited file of IPv4 ranges mapped to places, stores both
endpoints of every range in a BitTrie and answers nearest-key queries.

Usage:
    from iptrie.places import build_trie, parse_key

    trie = build_trie('ranges.csv')
    entry = trie.search(parse_key('1.0.0.10'))

CLI:
    place-ip ranges.csv
    python -m iptrie.places ranges.csv
"""

from .address import parse_key, format_address, InvalidAddressError
from .config import LoaderConfig, ConfigParseError, parse_config_file, parse_config_string
from .loader import Location, LocationRange, RangeFileError, read_ranges, load_trie
from .runner import build_trie, run_queries, show_info, main

__all__ = [
    'parse_key',
    'format_address',
    'InvalidAddressError',
    'LoaderConfig',
    'ConfigParseError',
    'parse_config_file',
    'parse_config_string',
    'Location',
    'LocationRange',
    'RangeFileError',
    'read_ranges',
    'load_trie',
    'build_trie',
    'run_queries',
    'show_info',
    'main',
]
