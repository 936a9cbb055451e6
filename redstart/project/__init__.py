"""Parser for ``.rsproj`` project files.

Turns the text of a project file into a ParseResult: the settings block,
every job as an ordered list of steps with ``use`` directives expanded, and
the list of modules the jobs need.

Usage:
    from redstart.project import parse_project_file
    result = parse_project_file('app.rsproj')
    for step in result.jobs['build']:
        print(step.type, step.cwd, step.options)

Errors are raised as ParseError; format_diagnostic renders one with the
surrounding source text.
"""

from .parser import parse_project_file, parse_project_string
from .diagnostics import format_diagnostic
from .scanner import Scanner
from .values import parse_value
from .blocks import parse_block
from .jobs import parse_job_body

__all__ = [
    'parse_project_file',
    'parse_project_string',
    'format_diagnostic',
    'Scanner',
    'parse_value',
    'parse_block',
    'parse_job_body',
]
