"""Rendering of parse errors with their source context.

    Error: Word maybe is not a valid word (line 2, column 11)
     |      flag: maybe
                  ^
"""

import click

from redstart.exceptions import ParseError


CONTEXT = 10
PREFIX = ' | '


def _single_line(text: str) -> str:
    return text.replace('\t', ' ').replace('\r', ' ').replace('\v', ' ')


def context_window(source: str, position: int) -> str:
    """Return up to CONTEXT characters on both sides of ``position``.

    The window never crosses a line break. The part before the position is
    left-padded to CONTEXT + 1 columns so the offending character always
    lands in the same column.
    """
    before = source[max(position - CONTEXT, 0):position]
    if '\n' in before:
        before = before[before.rindex('\n') + 1:]
    after = source[position:position + CONTEXT].split('\n', 1)[0]
    return _single_line(before).rjust(CONTEXT + 1) + _single_line(after)


def format_diagnostic(error: ParseError, color: bool = False) -> str:
    """Render ``error`` as a message line, a context line and a caret line."""
    headline = f"Error: {error}"
    if color:
        headline = click.style(headline, fg='red')
    caret = ' ' * (len(PREFIX) + CONTEXT + 1) + '^'
    return '\n'.join([
        headline,
        PREFIX + context_window(error.source, error.position),
        caret,
    ])
