"""Reading address ranges from a delimited file into a trie.

Each row maps an address range to a place. Both endpoints of the range
are inserted as separate entries, each with its own Location value, so a
nearest-key search for any address inside the range lands on one of them.
"""

import csv
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from iptrie.trie import BitTrie, InsertResult
from .address import InvalidAddressError, parse_key
from .config import LoaderConfig

logger = logging.getLogger(__name__)


@dataclass
class Location:
    """Place an address range is mapped to."""
    country_code: str
    country_name: str
    province: str
    city: str


@dataclass
class LocationRange:
    """An address range and its place.

    Attributes:
        start: First key of the range.
        end: Last key of the range.
        location: Where the range is.
        line: Line number in the source file (for error messages).
    """
    start: int
    end: int
    location: Location
    line: int = 0


class RangeFileError(Exception):
    """Malformed row in a range file."""
    pass


def read_ranges(
    path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> Iterator[LocationRange]:
    """Read address ranges from a delimited file.

    Blank rows are skipped. Range endpoints may be plain integers or
    dotted addresses.

    Args:
        path: Path to the range file
        config: File layout (default: LoaderConfig())

    Yields:
        One LocationRange per data row, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        RangeFileError: If a row is malformed
    """
    if config is None:
        config = LoaderConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Range file not found: {path}")

    with open(path, newline='', encoding=config.encoding) as f:
        reader = csv.reader(f, delimiter=config.delimiter, quotechar=config.quotechar)
        for row in reader:
            if config.skip_header and reader.line_num == 1:
                continue
            if not row or all(not cell.strip() for cell in row):
                continue
            yield _parse_row(row, reader.line_num, config)


def _parse_row(row: List[str], line: int, config: LoaderConfig) -> LocationRange:
    """Turn one CSV row into a LocationRange."""
    if len(row) < config.min_columns:
        raise RangeFileError(
            f"Line {line}: expected at least {config.min_columns} fields, got {len(row)}"
        )

    cols = config.columns
    try:
        start = parse_key(row[cols['start']])
        end = parse_key(row[cols['end']])
    except InvalidAddressError as e:
        raise RangeFileError(f"Line {line}: {e}")

    if start > end:
        raise RangeFileError(f"Line {line}: range start {start} is after end {end}")

    location = Location(
        country_code=row[cols['country_code']].strip(),
        country_name=row[cols['country_name']].strip(),
        province=row[cols['province']].strip(),
        city=row[cols['city']].strip(),
    )
    return LocationRange(start=start, end=end, location=location, line=line)


def load_trie(
    ranges: Iterable[LocationRange],
    trie: Optional[BitTrie[Location]] = None,
) -> BitTrie[Location]:
    """Insert both endpoints of every range into a trie.

    Endpoints already present (shared by adjacent rows, or a single
    address range whose start equals its end) keep the first row's
    location.

    Args:
        ranges: Ranges to load
        trie: Trie to load into (default: a new empty BitTrie)

    Returns:
        The loaded trie
    """
    if trie is None:
        trie = BitTrie()

    rows = 0
    duplicates = 0
    for rng in ranges:
        rows += 1
        for key in (rng.start, rng.end):
            result = trie.insert(key, replace(rng.location))
            if result is InsertResult.DUPLICATE:
                duplicates += 1

    logger.info(f"Loaded {rows} range(s), {trie.size} entries, {duplicates} duplicate endpoint(s)")
    return trie
