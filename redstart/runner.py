"""Project runner: load a project file and execute one of its jobs.

This module provides the main entry point for running jobs from
``.rsproj`` files.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import yaml

from redstart import __version__
from redstart.exceptions import (
    ParseError,
    ProjectNotFoundError,
    RedstartError,
    StepValidationError,
    UnknownJobError,
)
from redstart.model import ConfigMap, ParseResult
from redstart.modules import ModuleRegistry, StepContext, default_registry, format_usage
from redstart.project import format_diagnostic, parse_project_file
from redstart.project.parser import collect_modules


logger = logging.getLogger(__name__)

PROJECT_SUFFIX = '.rsproj'


@dataclass
class RunResult:
    """Result of running a job."""

    job: str
    """Name of the job that ran."""

    steps_validated: int = 0
    """Number of steps whose module accepted their options."""

    steps_executed: int = 0
    """Number of steps that were initiated and completed."""


def find_project_file(path: Union[str, Path]) -> Path:
    """Locate the project file named by ``path``.

    ``path`` may be a project file, a project file without its suffix or a
    directory containing exactly one project file.

    Raises:
        ProjectNotFoundError: If no single project file can be found
    """
    path = Path(path)
    if path.is_dir():
        candidates = sorted(
            p for p in path.iterdir()
            if p.is_file() and p.suffix == PROJECT_SUFFIX
        )
        if not candidates:
            raise ProjectNotFoundError(f"No {PROJECT_SUFFIX} files found in {path}")
        if len(candidates) > 1:
            names = ', '.join(p.name for p in candidates)
            raise ProjectNotFoundError(
                f"Multiple project files found in {path}: {names}. "
                f"Pass one of them explicitly."
            )
        return candidates[0]

    if path.is_file():
        return path
    with_suffix = path.with_name(path.name + PROJECT_SUFFIX)
    if with_suffix.is_file():
        return with_suffix
    raise ProjectNotFoundError(f"No file found. Looking for: {path}")


def project_root(project_file: Path, settings: ConfigMap) -> Path:
    """Return the directory steps run relative to.

    This is the project file's directory, moved by the ``cwd`` setting.

    Raises:
        ProjectNotFoundError: If the directory doesn't exist
    """
    root = (project_file.parent / str(settings.get('cwd', ''))).resolve()
    if not root.is_dir():
        raise ProjectNotFoundError(
            f"Current directory not found. Expecting to find {root}"
        )
    return root


def select_job(project: ParseResult, job: Optional[str] = None) -> str:
    """Pick the job to run.

    Without an explicit name, a project with a single job runs that job.

    Raises:
        UnknownJobError: If no job can be selected
    """
    if job is None:
        if len(project.jobs) == 1:
            return next(iter(project.jobs))
        if not project.jobs:
            raise UnknownJobError("No jobs defined")
        raise UnknownJobError(
            f"Multiple jobs defined, choose one of: {', '.join(project.jobs)}"
        )
    if job not in project.jobs:
        raise UnknownJobError(f"No job with the name {job} found")
    return job


def run_job(
    project: ParseResult,
    job: Optional[str],
    root: Path,
    registry: ModuleRegistry,
) -> RunResult:
    """Validate and then run every step of ``job``.

    Every module the jobs reference must be registered. All steps are
    validated before the first one is initiated; steps run one after the
    other in job order.

    Raises:
        UnknownJobError: If ``job`` is not defined
        UnknownModuleError: If a step type has no registered module
        StepValidationError: If a module rejects its step
        StepFailedError: If a step fails while running
    """
    job = select_job(project, job)
    modules = registry.resolve(collect_modules(project.jobs))
    steps = project.jobs[job]
    result = RunResult(job=job)

    contexts = [
        StepContext(
            step_type=step.type,
            options=dict(step.options),
            cwd=root / step.cwd,
            settings=project.settings,
        )
        for step in steps
    ]

    for step, context in zip(steps, contexts):
        logger.debug("Validating %s", step.type)
        if not modules[step.type].validate(context):
            raise StepValidationError(step.type)
        result.steps_validated += 1

    for step, context in zip(steps, contexts):
        logger.debug("Running %s in %s", step.type, context.cwd)
        modules[step.type].initiate(context)
        result.steps_executed += 1

    return result


def run_project(
    project_path: Union[str, Path],
    job: Optional[str] = None,
    registry: Optional[ModuleRegistry] = None,
) -> RunResult:
    """Load a project file and run one of its jobs.

    Args:
        project_path: Project file or directory containing one
        job: Job to run; optional when the project has a single job
        registry: Modules to use (defaults to the built-in modules)

    Returns:
        RunResult with execution statistics

    Example:
        result = run_project('app.rsproj', 'build')
        print(f"Ran {result.steps_executed} steps")
    """
    project_file = find_project_file(project_path)
    project = parse_project_file(project_file)
    logger.debug("Parsed %s", project_file)
    return _run(project_file, project, job, registry or default_registry())


def _run(
    project_file: Path,
    project: ParseResult,
    job: Optional[str],
    registry: ModuleRegistry,
) -> RunResult:
    root = project_root(project_file, project.settings)
    logger.debug("CWD: %s", root)
    logger.info("Using %s", ', '.join(project.modules))
    return run_job(project, job, root, registry)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(message)s',
        stream=sys.stderr,
    )


def main(args: Optional[List[str]] = None) -> int:
    """CLI entry point for running project jobs.

    Usage:
        redstart [options] [project] [job]

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    import argparse

    parser = argparse.ArgumentParser(
        description='Run a job from a .rsproj project file',
        prog='redstart',
    )
    parser.add_argument(
        'project',
        nargs='?',
        default='.',
        help='Project file, or a directory containing one (default: .)',
    )
    parser.add_argument(
        'job',
        nargs='?',
        default=None,
        help='Job to run (optional when the project defines a single job)',
    )
    parser.add_argument(
        '-m', '--modules',
        action='store_true',
        help='List the available modules',
    )
    parser.add_argument(
        '-u', '--usage',
        metavar='MODULE',
        default=None,
        help='Show the options of a module',
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'Redstart v{__version__}',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Print debug information',
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Parse the project and print it without running anything',
    )

    parsed = parser.parse_args(args)
    registry = default_registry()

    if parsed.modules:
        print('\n'.join(registry.names))
        return 0

    try:
        if parsed.usage is not None:
            print(format_usage(registry.get(parsed.usage)))
            return 0

        project_file = find_project_file(parsed.project)
        project = parse_project_file(project_file)

        _configure_logging(parsed.verbose or project.settings.get('dbgprint') is True)
        logger.debug("Config file parsed successfully!")

        if parsed.dry_run:
            print(yaml.safe_dump(project.to_dict(), sort_keys=False), end='')
            return 0

        result = _run(project_file, project, parsed.job, registry)
        logger.info(
            "Completed job %s (%d step(s))", result.job, result.steps_executed
        )
        return 0

    except ParseError as e:
        print(format_diagnostic(e, color=sys.stderr.isatty()), file=sys.stderr)
        return 1
    except RedstartError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
