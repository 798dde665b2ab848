"""CLI entry point for iptrie.places.

Usage:
    python -m iptrie.places [options] data_file

Example:
    python -m iptrie.places ranges.csv
    python -m iptrie.places --config layout.yaml --show ranges.csv
"""

from .runner import main
import sys

if __name__ == '__main__':
    sys.exit(main())
