"""Reflection source contract consumed by compilers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..models import ArgumentSpec

ClassHandle = Any
"""Opaque reference to a class; its concrete type belongs to the registry."""


class ClassRegistry(ABC):
    """Read-only view over a universe of classes and their declarations."""

    @abstractmethod
    def all_classes(self) -> Iterable[ClassHandle]:
        """Enumerate every class known to the registry, named or not."""

    @abstractmethod
    def qualified_name(self, cls: ClassHandle) -> Optional[str]:
        """Return ``module.qualname`` or ``None`` for classes without a stable name."""

    @abstractmethod
    def module_of(self, cls: ClassHandle) -> str:
        """Return the module name that owns the class."""

    @abstractmethod
    def ancestors(self, cls: ClassHandle) -> Sequence[ClassHandle]:
        """Return the ancestor chain, most-derived first, excluding ``cls``."""

    @abstractmethod
    def is_subtype(self, cls: ClassHandle, other: ClassHandle) -> bool:
        """Return True when ``cls`` strictly inherits from ``other``."""

    @abstractmethod
    def declared_arguments(self, cls: ClassHandle) -> List[ArgumentSpec]:
        """Return positional argument declarations in declaration order."""

    @abstractmethod
    def declared_options(self, cls: ClassHandle) -> Mapping[str, ArgumentSpec]:
        """Return named option declarations keyed by option name."""

    @abstractmethod
    def lookup(self, qualified_name: str) -> Optional[ClassHandle]:
        """Return the class registered under ``qualified_name`` if loaded."""

    def class_path(self, cls: ClassHandle) -> Optional[str]:
        """Return the dotted class path inside its module (``Outer.Inner``)."""
        name = self.qualified_name(cls)
        if name is None:
            return None
        module = self.module_of(cls)
        prefix = f"{module}."
        if module and name.startswith(prefix):
            return name[len(prefix):]
        return name
