"""Top-level parsing of ``.rsproj`` project files.

A project file is a sequence of named brace blocks. The block named
``settings`` holds document-wide options; every other block is a job:

    settings {
        dbgprint: true
    }

    build {
        @build/generic {
            command: "make"
        }
    }

    test {
        use build
        echo { message: "built" }
    }
"""

from pathlib import Path
from typing import List, Union

from redstart.exceptions import ErrorKind
from redstart.model import ConfigMap, JobTable, ParseResult
from .blocks import parse_block
from .jobs import capture_block, parse_job_body, read_name
from .scanner import Scanner


SETTINGS = 'settings'


def parse_project_file(path: Union[str, Path], cwd: str = '.') -> ParseResult:
    """Parse a project file from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file content is invalid
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Project file not found: {path}")
    return parse_project_string(path.read_text(), cwd=cwd)


def parse_project_string(content: str, cwd: str = '.') -> ParseResult:
    """Parse project file content.

    Args:
        content: Full text of the project file
        cwd: Working directory given to steps without their own ``cwd``

    Returns:
        ParseResult with every ``use`` resolved

    Raises:
        ParseError: On the first invalid construct; nothing is returned
            for partially valid input
    """
    scanner = Scanner(content)
    jobs: JobTable = {}
    settings: ConfigMap = {}
    seen_settings = False

    while True:
        scanner.skip_whitespace()
        if scanner.at_end():
            break

        name_start = scanner.pos
        name = read_name(scanner)
        scanner.skip_whitespace()

        if name in jobs:
            raise scanner.error(
                ErrorKind.SEMANTIC,
                'A job with this name is already defined',
                name_start,
            )
        if name == SETTINGS and seen_settings:
            raise scanner.error(
                ErrorKind.SEMANTIC,
                'The settings are already defined',
                name_start,
            )

        start, end = capture_block(scanner)
        body = scanner.sub(start, end)
        if name == SETTINGS:
            settings = parse_block(body)
            seen_settings = True
        else:
            jobs[name] = parse_job_body(body, jobs, cwd=cwd)

    return ParseResult(jobs=jobs, settings=settings, modules=collect_modules(jobs))


def collect_modules(jobs: JobTable) -> List[str]:
    """Return every distinct step type in first-seen order."""
    modules: List[str] = []
    for steps in jobs.values():
        for step in steps:
            if step.type not in modules:
                modules.append(step.type)
    return modules
