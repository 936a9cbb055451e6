"""Parsing of job bodies.

A job body is a sequence of steps and ``use`` directives:

    release {
        use build
        @build/generic {
            command: "strip"
            arguments: "out/app"
            cwd: "dist"
        }
    }

``use build`` splices the already-resolved steps of the earlier job
``build`` at that point.
"""

import os
from typing import Tuple

from redstart.exceptions import ErrorKind
from redstart.model import Job, JobTable, Step
from .blocks import parse_block
from .scanner import Scanner, to_printable


USE = 'use'
CWD_KEY = 'cwd'


def capture_block(scanner: Scanner) -> Tuple[int, int]:
    """Consume a ``{ ... }`` block starting at the cursor.

    Nested braces are matched with a depth counter; the block ends at the
    first ``}`` that takes the depth below zero.

    Returns:
        ``(start, end)`` of the block body, excluding both braces

    Raises:
        ParseError: If the cursor is not on ``{`` or the input ends before
            the closing ``}``
    """
    char = scanner.peek()
    if char != '{':
        raise scanner.error(
            ErrorKind.NESTING,
            f'Expected {{, but found {to_printable(char)}',
        )
    scanner.advance()

    start = scanner.pos
    depth = 0
    while True:
        char = scanner.advance()
        if char == '':
            raise scanner.error(ErrorKind.NESTING, 'Expected }, but found nothing')
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth < 0:
                return start, scanner.pos - 1


def read_name(scanner: Scanner) -> str:
    """Read a block or step name; it ends at whitespace or ``{``."""
    name = scanner.read_word(stop='{')
    if not name:
        raise scanner.error(
            ErrorKind.LEXICAL,
            f'Expected a name, but found {to_printable(scanner.peek())}',
        )
    return name


def resolve_cwd(cwd: str, override: str) -> str:
    """Apply a step's ``cwd`` option to the inherited working directory."""
    if os.path.isabs(override):
        return override
    return os.path.normpath(os.path.join(cwd, override))


def parse_job_body(scanner: Scanner, jobs: JobTable, cwd: str = '.') -> Job:
    """Parse the steps of one job.

    Args:
        scanner: Scanner over the text between the job's braces
        jobs: Jobs defined earlier in the document, available to ``use``
        cwd: Working directory inherited by every step

    Returns:
        The job's steps in declaration order
    """
    job: Job = []

    while True:
        scanner.skip_whitespace()
        if scanner.at_end():
            break

        name_start = scanner.pos
        name = read_name(scanner)
        scanner.skip_whitespace()

        if name == USE:
            target_start = scanner.pos
            target = scanner.read_word()
            if target not in jobs:
                raise scanner.error(
                    ErrorKind.SEMANTIC,
                    f'No job with the name {target} found',
                    target_start,
                )
            job.extend(jobs[target])
            continue

        start, end = capture_block(scanner)
        options = parse_block(scanner.sub(start, end))

        step_cwd = cwd
        if CWD_KEY in options:
            override = options.pop(CWD_KEY)
            if isinstance(override, list):
                raise scanner.error(
                    ErrorKind.SEMANTIC,
                    f'Step {name} defines more than one cwd',
                    name_start,
                )
            if not isinstance(override, str):
                raise scanner.error(
                    ErrorKind.SEMANTIC,
                    f'The cwd of step {name} must be a string',
                    name_start,
                )
            step_cwd = resolve_cwd(cwd, override)

        job.append(Step(type=name, cwd=step_cwd, options=options))

    return job
