"""Step modules and the registry that maps step types to them.

Classes:
    Module: ABC every step module implements (validate/initiate)
    FieldSpec: Declaration of an option a module understands
    StepContext: Options, directory, settings and logger of one step call
    ModuleRegistry: Step type name -> Module

Built-in modules:
    echo: Echo
    @build/generic: GenericBuild
    @build/c: CBuild
    @build/cpp: CppBuild
    @git/fetch: GitFetch
    @git/gitignore: GitIgnore
"""

from .base import Module, FieldSpec, StepContext, check_fields
from .registry import ModuleRegistry, default_registry
from .usage import format_usage

__all__ = [
    'Module',
    'FieldSpec',
    'StepContext',
    'check_fields',
    'ModuleRegistry',
    'default_registry',
    'format_usage',
]
