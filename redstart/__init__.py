"""Redstart: build and task automation driven by ``.rsproj`` project files.

A project file declares a settings block and named jobs, each an ordered
list of steps executed by modules:

    settings {
        cwd: "."
    }

    build {
        @build/generic {
            command: "make"
            arguments: "all"
        }
    }

    release {
        use build
        echo {
            message: "done"
            color: "green"
        }
    }

Usage:
    from redstart import run_project
    result = run_project('app.rsproj', 'release')

CLI:
    redstart app.rsproj release
"""

__version__ = '1.0.0'

from .model import Step, ParseResult
from .exceptions import RedstartError, ParseError, ErrorKind
from .project import parse_project_file, parse_project_string, format_diagnostic
from .runner import run_project, main

__all__ = [
    'Step',
    'ParseResult',
    'RedstartError',
    'ParseError',
    'ErrorKind',
    'parse_project_file',
    'parse_project_string',
    'format_diagnostic',
    'run_project',
    'main',
]
