"""Character scanner shared by all parsing stages.

A Scanner walks a window of the complete project text. Nested stages get
their own Scanner over a sub-window of the same text, so every position they
report is an absolute index into the document.
"""

from typing import Optional

from redstart.exceptions import ErrorKind, ParseError


WHITESPACE = ' \n\r\t\v'


def is_space(char: str) -> bool:
    """Return True for the whitespace characters of the project format."""
    return char != '' and char in WHITESPACE


def to_printable(char: str) -> str:
    """Render a character for an error message."""
    if char == '':
        return 'nothing'
    return {'\n': '\\n', '\t': '\\t', '\r': '\\r', '\v': '\\v'}.get(char, char)


class Scanner:
    """Cursor over ``source[start:end]``.

    Reading past ``end`` returns the empty string instead of raising; callers
    decide whether running out of input is fatal.
    """

    def __init__(self, source: str, start: int = 0, end: Optional[int] = None):
        self.source = source
        self.start = start
        self.end = len(source) if end is None else end
        self.pos = start

    def __repr__(self) -> str:
        return f"Scanner({self.text!r}, pos={self.pos})"

    @property
    def text(self) -> str:
        """The text of the whole window."""
        return self.source[self.start:self.end]

    def at_end(self) -> bool:
        return self.pos >= self.end

    def peek(self) -> str:
        """Return the character under the cursor without consuming it."""
        if self.pos >= self.end:
            return ''
        return self.source[self.pos]

    def advance(self) -> str:
        """Consume and return the character under the cursor."""
        char = self.peek()
        if char:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        while is_space(self.peek()):
            self.pos += 1

    def read_word(self, stop: str = '') -> str:
        """Consume a run of non-whitespace characters.

        Args:
            stop: Extra characters that end the word without being consumed
        """
        begin = self.pos
        while True:
            char = self.peek()
            if char == '' or is_space(char) or char in stop:
                break
            self.pos += 1
        return self.source[begin:self.pos]

    def sub(self, start: int, end: int) -> 'Scanner':
        """Return a new Scanner over ``source[start:end]``."""
        return Scanner(self.source, start, end)

    def error(
        self,
        kind: ErrorKind,
        message: str,
        position: Optional[int] = None,
    ) -> ParseError:
        """Build a ParseError at ``position`` (defaults to the cursor)."""
        if position is None:
            position = self.pos
        return ParseError(kind, message, position, self.source)
