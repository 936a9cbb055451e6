"""Interface implemented by every step module.

A module executes the steps of one type. The orchestrator first calls
``validate`` for every step of the selected job and only then ``initiate``
for each step in order. Both receive a StepContext.

Example:
    class Touch(Module):
        name = 'touch'
        description = 'Create an empty file'
        required_fields = [FieldSpec('path', 'File to create')]

        def validate(self, context):
            return check_fields(self, context) is None

        def initiate(self, context):
            (context.cwd / context.options['path']).touch()
"""

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from redstart.model import ConfigMap, ConfigValue


FIELD_TYPES = ('string', 'number', 'boolean', 'scalar', 'list')


@dataclass(frozen=True)
class FieldSpec:
    """Description of one option a module understands.

    Attributes:
        name: Option key
        description: Help text, may span several lines
        type: One of 'string', 'number', 'boolean', 'scalar' (any single
              value) or 'list' (a scalar or an array of scalars)
        choices: Allowed values, if restricted; compared as text
    """
    name: str
    description: str
    type: str = 'string'
    choices: Optional[List[str]] = None


class StepLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes every message with the step type."""

    def process(self, msg, kwargs):
        return f"[{self.extra['step_type']}] {msg}", kwargs


@dataclass
class StepContext:
    """Everything a module call gets to know about its step."""

    step_type: str
    """Type name of the step, used as the log prefix."""

    options: ConfigMap
    """Options declared in the step's block (without ``cwd``)."""

    cwd: Path
    """Absolute working directory of the step."""

    settings: ConfigMap = field(default_factory=dict)
    """The project's settings block."""

    logger: StepLogger = field(init=False, repr=False)

    def __post_init__(self):
        self.logger = StepLogger(
            logging.getLogger('redstart.modules'),
            {'step_type': self.step_type},
        )

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Report progress of a named part of the step."""
        self.logger.info(name)
        started = time.monotonic()
        try:
            yield
        finally:
            self.logger.debug("%s took %.3fs", name, time.monotonic() - started)


class Module(ABC):
    """Base class for step modules."""

    name: str = ''
    description: str = ''
    required_fields: List[FieldSpec] = []
    optional_fields: List[FieldSpec] = []

    @abstractmethod
    def validate(self, context: StepContext) -> bool:
        """Return True if the step's options can be executed."""
        pass

    @abstractmethod
    def initiate(self, context: StepContext) -> None:
        """Execute the step.

        Raises:
            StepFailedError: If the step could not be completed
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def as_list(value: ConfigValue) -> list:
    """Return a config value as a list of scalars."""
    if isinstance(value, list):
        return value
    return [value]


def _matches_type(value: ConfigValue, field_type: str) -> bool:
    if field_type == 'list':
        return True
    if isinstance(value, list):
        return False
    if field_type == 'boolean':
        return isinstance(value, bool)
    if field_type == 'number':
        return isinstance(value, int) and not isinstance(value, bool)
    if field_type == 'scalar':
        return True
    return isinstance(value, str)


def check_fields(module: Module, context: StepContext) -> Optional[str]:
    """Check a step's options against the module's field declarations.

    Unknown options are allowed. Problems are logged through the step's
    logger.

    Returns:
        None if the options are valid, otherwise a description of the first
        problem
    """
    problem = None
    options = context.options
    for spec in module.required_fields:
        if spec.name not in options:
            problem = f"missing required field '{spec.name}'"
            break
    if problem is None:
        for spec in module.required_fields + module.optional_fields:
            if spec.name not in options:
                continue
            value = options[spec.name]
            if not _matches_type(value, spec.type):
                problem = f"'{spec.name}' must be a {spec.type}"
                break
            if spec.choices and str(value) not in spec.choices:
                problem = (
                    f"'{spec.name}' must be one of {', '.join(spec.choices)}"
                )
                break

    if problem is not None:
        context.logger.error(problem)
    return problem
