"""Registry mapping step type names to module implementations."""

from typing import Dict, Iterator, List

from redstart.exceptions import UnknownModuleError
from .base import Module


class ModuleRegistry:
    """Modules available to a run, keyed by step type name."""

    def __init__(self):
        self._modules: Dict[str, Module] = {}

    def register(self, module: Module) -> Module:
        """Add ``module`` under its ``name``, replacing any earlier one."""
        if not module.name:
            raise ValueError(f"{module!r} has no name")
        self._modules[module.name] = module
        return module

    def get(self, name: str) -> Module:
        try:
            return self._modules[name]
        except KeyError:
            raise UnknownModuleError(name) from None

    def resolve(self, names: List[str]) -> Dict[str, Module]:
        """Look up every name; fails on the first unknown one."""
        return {name: self.get(name) for name in names}

    @property
    def names(self) -> List[str]:
        return sorted(self._modules)

    def __contains__(self, name: str) -> bool:
        return name in self._modules

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules[name] for name in self.names)

    def __len__(self) -> int:
        return len(self._modules)


def default_registry() -> ModuleRegistry:
    """Return a registry holding the built-in modules."""
    from .build import GenericBuild
    from .compiler import CBuild, CppBuild
    from .echo import Echo
    from .git import GitFetch
    from .gitignore import GitIgnore

    registry = ModuleRegistry()
    builtins = (Echo(), GenericBuild(), CBuild(), CppBuild(), GitFetch(), GitIgnore())
    for module in builtins:
        registry.register(module)
    return registry
