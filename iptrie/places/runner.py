"""Interactive address-to-place lookup.

Loads a range file into a BitTrie, prints the trie statistics, then reads
addresses one per line and prints the nearest stored entry for each.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union

from iptrie.trie import BitTrie, Entry
from .address import InvalidAddressError, format_address, parse_key
from .config import LoaderConfig, parse_config_file
from .loader import Location, load_trie, read_ranges

logger = logging.getLogger(__name__)

PROMPT = '> '
BANNER = 'Enter an ipv4 string or a number (or a blank line to quit).'


def show_info(entry: Entry[Location], stream: TextIO) -> None:
    """Write one entry as "<key>: (<address>, <cc>: <country>, <city>, <province>)"."""
    loc = entry.value
    stream.write(
        f"{entry.key}: ({format_address(entry.key)}, "
        f"{loc.country_code}: {loc.country_name}, {loc.city}, {loc.province})\n"
    )


def build_trie(
    data_file: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> BitTrie[Location]:
    """Load every range in data_file into a new trie.

    Args:
        data_file: Path to the range file
        config: File layout (default: LoaderConfig())

    Returns:
        Trie holding both endpoints of every range
    """
    trie: BitTrie[Location] = BitTrie(show_entry=show_info)
    return load_trie(read_ranges(data_file, config), trie)


def print_stats(trie: BitTrie, stream: TextIO) -> None:
    """Write the height, size and node count of trie."""
    stream.write("\n")
    stream.write(f"height: {trie.height}\n")
    stream.write(f"size: {trie.size}\n")
    stream.write(f"node_count: {trie.node_count}\n")
    stream.write("\n\n")


def run_queries(trie: BitTrie[Location], source: TextIO, output: TextIO) -> int:
    """Answer address queries until a blank line or end of input.

    Args:
        trie: Trie to search; an empty one answers NOT FOUND
        source: Stream to read queries from, one per line
        output: Stream to write prompts and answers to

    Returns:
        Number of queries answered (invalid and unfound ones excluded)
    """
    answered = 0
    output.write(PROMPT)
    output.flush()
    for line in source:
        if not line.strip():
            break

        try:
            key = parse_key(line)
        except InvalidAddressError as e:
            logger.debug(f"Rejected query {line.strip()!r}: {e}")
            output.write("INVALID KEY\n")
        else:
            result = trie.explain(key)
            if result.entry is None:
                output.write("NOT FOUND\n")
            else:
                logger.debug(
                    f"Query {key} reached {result.entry.key} in {result.steps} step(s), "
                    f"fallback={result.fallback}"
                )
                show_info(result.entry, output)
                answered += 1

        output.write(PROMPT)
        output.flush()

    return answered


def main(args: Optional[List[str]] = None) -> int:
    """CLI entry point for the lookup tool.

    Usage:
        place-ip [options] data_file

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    import argparse

    parser = argparse.ArgumentParser(
        description='Look up the place an IPv4 address belongs to',
        prog='place-ip',
    )
    parser.add_argument(
        'data_file',
        help='Delimited file of address ranges and places',
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='YAML file describing the range file layout',
    )
    parser.add_argument(
        '--show',
        action='store_true',
        help='Print every stored entry before answering queries',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging',
    )

    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = parse_config_file(parsed.config) if parsed.config else None
        trie = build_trie(parsed.data_file, config)

        if trie.size == 0:
            print("error: empty dataset", file=sys.stderr)
            return 1

        print_stats(trie, sys.stdout)
        if parsed.show:
            trie.show(sys.stdout)
            print()

        print(BANNER)
        run_queries(trie, sys.stdin, sys.stdout)
        trie.destroy()
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
