"""Parsing of the value part of a ``key: value`` line.

A value is one or more whitespace-separated tokens. Each token is a quoted
string, a run of digits or one of the words ``true``/``false``.

    name: "redstart"           -> 'redstart'
    retries: 3                 -> 3
    flags: "-O2" "-Wall"       -> ['-O2', '-Wall']
    release: true              -> True
"""

from typing import List

from redstart.exceptions import ErrorKind
from redstart.model import ConfigValue, ScalarValue
from .scanner import Scanner, is_space, to_printable


DIGITS = '0123456789'

# Escapes understood inside strings; any other escaped character is dropped.
ESCAPES = {'n': '\n', '"': '"'}

BOOLEANS = {'true': True, 'false': False}


def parse_value(scanner: Scanner) -> ConfigValue:
    """Parse every token left in ``scanner``.

    Returns:
        A single scalar when exactly one token is present, otherwise a list of
        scalars in source order

    Raises:
        ParseError: On a line break inside the value, a malformed token or
            when no token is present
    """
    newline = scanner.text.find('\n')
    if newline > -1:
        raise scanner.error(
            ErrorKind.LEXICAL,
            'A value cannot include a new line',
            scanner.start + newline,
        )

    begin = scanner.pos
    values: List[ScalarValue] = []
    while True:
        scanner.skip_whitespace()
        char = scanner.peek()
        if char == '':
            break
        if char == '"':
            values.append(_read_string(scanner))
        elif char in DIGITS:
            values.append(_read_number(scanner))
        else:
            values.append(_read_boolean(scanner))

    if not values:
        raise scanner.error(ErrorKind.SEMANTIC, 'No value defined', begin)
    if len(values) == 1:
        return values[0]
    return values


def _read_string(scanner: Scanner) -> str:
    scanner.advance()
    chars = []
    escaped = False
    while True:
        char = scanner.advance()
        if char == '':
            raise scanner.error(ErrorKind.LEXICAL, 'Expected ", but found nothing')
        if escaped:
            escaped = False
            if char in ESCAPES:
                chars.append(ESCAPES[char])
        elif char == '\\':
            escaped = True
        elif char == '"':
            return ''.join(chars)
        else:
            chars.append(char)


def _read_number(scanner: Scanner) -> int:
    begin = scanner.pos
    while True:
        char = scanner.peek()
        if char == '' or is_space(char):
            break
        if char not in DIGITS:
            raise scanner.error(
                ErrorKind.LEXICAL,
                f'Expected a number, but found {to_printable(char)}',
            )
        scanner.advance()
    return int(scanner.source[begin:scanner.pos])


def _read_boolean(scanner: Scanner) -> bool:
    begin = scanner.pos
    word = scanner.read_word()
    if word not in BOOLEANS:
        raise scanner.error(
            ErrorKind.LEXICAL,
            f'Word {word} is not a valid word',
            begin,
        )
    return BOOLEANS[word]
