"""YAML configuration for range files.

A range file is a delimited text file with one address range per row.
By default it follows the common "ip_from, ip_to, country code, country
name, region, city" layout with every field double-quoted. A YAML file
can describe a different layout:

    delimiter: ";"
    quotechar: "'"
    encoding: latin-1
    skip_header: true
    columns:
      start: 0
      end: 1
      country_code: 2
      country_name: 3
      province: 4
      city: 5
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import yaml

COLUMN_FIELDS = ('start', 'end', 'country_code', 'country_name', 'province', 'city')


def _default_columns() -> Dict[str, int]:
    return {name: index for index, name in enumerate(COLUMN_FIELDS)}


@dataclass
class LoaderConfig:
    """How to read a range file.

    Attributes:
        delimiter: Field separator.
        quotechar: Character used to quote fields.
        encoding: Text encoding of the file.
        skip_header: Whether the first row is a header.
        columns: 0-based column index for each field in COLUMN_FIELDS.
    """
    delimiter: str = ','
    quotechar: str = '"'
    encoding: str = 'utf-8'
    skip_header: bool = False
    columns: Dict[str, int] = field(default_factory=_default_columns)

    @property
    def min_columns(self) -> int:
        """Number of fields a row needs to cover every configured column."""
        return max(self.columns.values()) + 1


class ConfigParseError(Exception):
    """Error parsing or validating a YAML configuration."""
    pass


def parse_config_file(path: Union[str, Path]) -> LoaderConfig:
    """Parse and validate a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated LoaderConfig

    Raises:
        ConfigParseError: If the file is invalid
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        return parse_config_string(f.read())


def parse_config_string(content: str) -> LoaderConfig:
    """Parse YAML configuration from a string.

    An empty document yields the default configuration.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigParseError("YAML root must be a mapping")

    return _validate_config_data(data)


def _validate_config_data(data: Dict[str, Any]) -> LoaderConfig:
    """Validate parsed YAML data and build a LoaderConfig.

    Raises:
        ConfigParseError: If validation fails
    """
    defaults = LoaderConfig()
    known = {'delimiter', 'quotechar', 'encoding', 'skip_header', 'columns'}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigParseError(f"Unknown config key(s): {', '.join(map(str, unknown))}")

    for key in ('delimiter', 'quotechar'):
        value = data.get(key, getattr(defaults, key))
        if not isinstance(value, str) or len(value) != 1:
            raise ConfigParseError(f"'{key}' must be a single character")

    encoding = data.get('encoding', defaults.encoding)
    if not isinstance(encoding, str) or not encoding:
        raise ConfigParseError("'encoding' must be a non-empty string")

    skip_header = data.get('skip_header', defaults.skip_header)
    if not isinstance(skip_header, bool):
        raise ConfigParseError("'skip_header' must be a boolean")

    columns = _validate_columns(data.get('columns', {}))

    return LoaderConfig(
        delimiter=data.get('delimiter', defaults.delimiter),
        quotechar=data.get('quotechar', defaults.quotechar),
        encoding=encoding,
        skip_header=skip_header,
        columns=columns,
    )


def _validate_columns(columns: Any) -> Dict[str, int]:
    """Merge a column mapping over the default layout.

    Fields not mentioned keep their default index.
    """
    if not isinstance(columns, dict):
        raise ConfigParseError("'columns' must be a mapping")

    merged = _default_columns()
    for name, index in columns.items():
        if name not in COLUMN_FIELDS:
            raise ConfigParseError(
                f"Unknown column '{name}'. Valid columns: {', '.join(COLUMN_FIELDS)}"
            )
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ConfigParseError(f"Column '{name}' must be a non-negative integer")
        merged[name] = index

    seen: Dict[int, str] = {}
    for name in COLUMN_FIELDS:
        index = merged[name]
        if index in seen:
            raise ConfigParseError(
                f"Columns '{seen[index]}' and '{name}' both use index {index}"
            )
        seen[index] = name

    return merged
