"""Parsing and formatting of IPv4 addresses as 32-bit keys."""

import re

from iptrie.trie import MAX_KEY

OCTETS = 4
BITS_PER_OCTET = 8

_DIGITS = re.compile(r'[0-9]+')


class InvalidAddressError(ValueError):
    """Text cannot be turned into a 32-bit key."""
    pass


def parse_key(text: str) -> int:
    """Parse a query string into a 32-bit key.

    Accepts either a plain decimal integer ("167772161") or a dotted
    address of one to four octets. Missing trailing octets count as zero,
    so "10.1" is 10.1.0.0.

    Args:
        text: The string to parse. Surrounding whitespace is ignored.

    Returns:
        The key as an unsigned integer.

    Raises:
        InvalidAddressError: If text is not a valid address or integer.
    """
    text = text.strip()
    if not text:
        raise InvalidAddressError("Empty address")

    if '.' not in text:
        if not _DIGITS.fullmatch(text):
            raise InvalidAddressError(f"Not a non-negative integer: {text!r}")
        key = int(text)
        if key > MAX_KEY:
            raise InvalidAddressError(f"Integer out of 32-bit range: {text}")
        return key

    parts = text.split('.')
    if len(parts) > OCTETS:
        raise InvalidAddressError(f"Too many octets in {text!r}")

    key = 0
    for part in parts:
        if not _DIGITS.fullmatch(part):
            raise InvalidAddressError(f"Invalid octet {part!r} in {text!r}")
        octet = int(part)
        if octet > 255:
            raise InvalidAddressError(f"Octet {octet} out of range in {text!r}")
        key = (key << BITS_PER_OCTET) | octet

    return key << (BITS_PER_OCTET * (OCTETS - len(parts)))


def format_address(key: int) -> str:
    """Render a 32-bit key as a dotted-decimal address."""
    return '.'.join(
        str((key >> (BITS_PER_OCTET * shift)) & 0xFF)
        for shift in reversed(range(OCTETS))
    )
