"""Data model produced by the project file parser.

A project file is parsed once into a ParseResult. Nothing in it is mutated
after the parse completes.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Union


ScalarValue = Union[str, int, bool]
ConfigValue = Union[ScalarValue, List[ScalarValue]]
ConfigMap = Dict[str, ConfigValue]


@dataclass(frozen=True)
class Step:
    """One unit of work inside a job.

    Attributes:
        type: Name of the module that executes the step
        cwd: Working directory of the step, relative to the project root
             unless absolute
        options: Every other key declared in the step's block
    """
    type: str
    cwd: str = '.'
    options: Mapping[str, ConfigValue] = field(default_factory=dict)

    def __post_init__(self):
        # steps are shared between jobs by ``use``; keep their options read-only
        object.__setattr__(self, 'options', MappingProxyType(dict(self.options)))

    def to_dict(self) -> Dict[str, object]:
        return {'type': self.type, 'cwd': self.cwd, 'options': dict(self.options)}


Job = List[Step]
JobTable = Dict[str, Job]


@dataclass(frozen=True)
class ParseResult:
    """Fully resolved contents of a project file."""

    jobs: JobTable = field(default_factory=dict)
    """Jobs in declaration order, with ``use`` references already expanded."""

    settings: ConfigMap = field(default_factory=dict)
    """Contents of the ``settings`` block."""

    modules: List[str] = field(default_factory=list)
    """Every distinct step type, in first-seen order."""

    def to_dict(self) -> Dict[str, object]:
        """Plain-data form, suitable for YAML or JSON dumping."""
        return {
            'settings': dict(self.settings),
            'modules': list(self.modules),
            'jobs': {
                name: [step.to_dict() for step in steps]
                for name, steps in self.jobs.items()
            },
        }
