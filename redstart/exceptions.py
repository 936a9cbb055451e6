"""Exception hierarchy for redstart.

Every failure is raised as a subclass of RedstartError at the point where it
is detected. Only the command line entry point turns them into exit codes.
"""

from enum import Enum
from typing import Optional


class RedstartError(Exception):
    """Base class for all redstart errors."""
    pass


class ErrorKind(Enum):
    """Category of a parse failure."""
    LEXICAL = "lexical"        # bad string, number, word, line break, missing ':'
    NESTING = "nesting"        # missing '{' or unbalanced '}'
    SEMANTIC = "semantic"      # duplicate job, unknown 'use' target, empty value


class ParseError(RedstartError):
    """A fatal error while parsing a project file.

    Attributes:
        kind: Category of the failure
        message: Human-readable description
        position: Absolute character index into ``source``
        source: The complete text that was being parsed
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: int,
        source: str,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position
        self.source = source

    @property
    def line(self) -> int:
        """1-based line number of the failing position."""
        return self.source.count('\n', 0, self.position) + 1

    @property
    def column(self) -> int:
        """1-based column number of the failing position."""
        return self.position - (self.source.rfind('\n', 0, self.position) + 1) + 1

    def __str__(self) -> str:
        return f"{self.message} (line {self.line}, column {self.column})"


class ProjectNotFoundError(RedstartError):
    """No usable project file or working directory was found."""
    pass


class UnknownJobError(RedstartError):
    """The requested job is not defined in the project."""
    pass


class UnknownModuleError(RedstartError):
    """A step references a module that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"No module with the name {name} found")
        self.name = name


class StepValidationError(RedstartError):
    """A module rejected the options of one of its steps."""

    def __init__(self, step_type: str, reason: Optional[str] = None):
        message = f"Could not validate module {step_type}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.step_type = step_type


class StepFailedError(RedstartError):
    """A module failed while running a step."""

    def __init__(self, step_type: str, reason: str):
        super().__init__(f"{step_type}: {reason}")
        self.step_type = step_type
        self.reason = reason
