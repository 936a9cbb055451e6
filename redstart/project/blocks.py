"""Parsing of ``key: value`` blocks (settings and step options)."""

from typing import List

from redstart.exceptions import ErrorKind
from redstart.model import ConfigMap, ConfigValue
from .scanner import Scanner, is_space
from .values import parse_value


def _as_list(value: ConfigValue) -> List:
    if isinstance(value, list):
        return value
    return [value]


def merge_value(config: ConfigMap, key: str, value: ConfigValue) -> None:
    """Store ``value`` under ``key``, appending to any earlier value.

    A key declared more than once ends up as one list holding every value in
    declaration order.
    """
    if key in config:
        config[key] = _as_list(config[key]) + _as_list(value)
    else:
        config[key] = value


def parse_block(scanner: Scanner) -> ConfigMap:
    """Parse the body of a block into a ConfigMap.

    Each non-blank line is split at its first ``:``. The key is trimmed; the
    rest of the line, colons included, is the value.

    Raises:
        ParseError: If a line has no ``:`` or its value is invalid
    """
    source = scanner.source
    config: ConfigMap = {}

    line_start = scanner.start
    while line_start < scanner.end:
        line_end = source.find('\n', line_start, scanner.end)
        if line_end == -1:
            line_end = scanner.end

        line = source[line_start:line_end]
        if line.strip():
            colon = source.find(':', line_start, line_end)
            if colon == -1:
                raise scanner.error(
                    ErrorKind.LEXICAL,
                    'No value defined',
                    line_start + len(line.rstrip()),
                )
            key = source[line_start:colon].strip()

            value_start, value_end = colon + 1, line_end
            while value_start < value_end and is_space(source[value_start]):
                value_start += 1
            while value_end > value_start and is_space(source[value_end - 1]):
                value_end -= 1

            merge_value(config, key, parse_value(scanner.sub(value_start, value_end)))

        line_start = line_end + 1

    return config
