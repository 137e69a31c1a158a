"""Registry of script modules with their foreign functions and classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


class ModuleMapError(KeyError):
    """Raised when a module cannot be registered or changed."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class ForeignClassMethods:
    """The allocator and finalizer of a foreign class."""

    allocate: Optional[Callable[..., Any]]
    finalize: Optional[Callable[..., Any]]


@dataclass
class _Module:
    source: str
    locked: bool = False
    functions: Dict[str, Callable[..., Any]] = field(default_factory=dict)
    classes: Dict[str, ForeignClassMethods] = field(default_factory=dict)


class ModuleMap:
    """Maps module names to their source and foreign bindings."""

    def __init__(self):
        self._modules: Dict[str, _Module] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def _writable(self, name: str) -> _Module:
        module = self._modules.get(name)
        if module is None:
            raise ModuleMapError(f"module '{name}' is not registered")
        if module.locked:
            raise ModuleMapError(f"module '{name}' is locked")
        return module

    def add_module(self, name: str, source: str) -> None:
        """Register a module; raises ModuleMapError if the name is taken."""
        if name in self._modules:
            raise ModuleMapError(f"module '{name}' is already registered")
        self._modules[name] = _Module(source)

    def get_source(self, name: str) -> Optional[str]:
        """Return the module's source, or None if it is not registered here."""
        module = self._modules.get(name)
        return None if module is None else module.source

    def add_function(self, module_name: str, signature: str, fn) -> None:
        """Bind a foreign function; the latest binding for a signature wins."""
        self._writable(module_name).functions[signature] = fn

    def add_class(self, module_name: str, class_name: str, allocate, finalize) -> None:
        """Bind a foreign class; the latest binding for a name wins."""
        self._writable(module_name).classes[class_name] = ForeignClassMethods(
            allocate, finalize
        )

    def lock_module(self, name: str) -> None:
        """Forbid further bindings in a module; unknown names are ignored."""
        module = self._modules.get(name)
        if module is not None:
            module.locked = True

    def get_function(self, module_name: str, signature: str):
        """Return the bound function, or None."""
        module = self._modules.get(module_name)
        if module is None:
            return None
        return module.functions.get(signature)

    def get_class_methods(
        self, module_name: str, class_name: str
    ) -> Optional[ForeignClassMethods]:
        """Return the bound class methods, or None."""
        module = self._modules.get(module_name)
        if module is None:
            return None
        return module.classes.get(class_name)