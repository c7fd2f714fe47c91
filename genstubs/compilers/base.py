"""Base classes for compiler plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Iterable, Optional, Sequence

from ..registry import ClassHandle, ClassRegistry
from ..stubs import ClassNode, StubTree

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import GenStubsConfig


class CompilerError(RuntimeError):
    """Raised when a compiler cannot produce stubs for one candidate."""

    def __init__(self, message: str, *, class_name: str | None = None) -> None:
        super().__init__(message)
        self.class_name = class_name


class Compiler(ABC):
    """Contract for compilers that turn candidate classes into stub nodes."""

    name: ClassVar[str] = ""

    def __init__(self, registry: ClassRegistry) -> None:
        self.registry = registry

    @classmethod
    def from_config(cls, registry: ClassRegistry, config: Optional["GenStubsConfig"]) -> "Compiler":
        """Instantiate the compiler for a run; override to read settings."""
        return cls(registry)

    @staticmethod
    def instantiate(
        target: object, registry: ClassRegistry, config: Optional["GenStubsConfig"]
    ) -> "Compiler":
        """Build a compiler from a plugin target: an instance, a subclass or ``factory(registry)``."""
        if isinstance(target, Compiler):
            return target
        if isinstance(target, type) and issubclass(target, Compiler):
            return target.from_config(registry, config)
        if callable(target):
            instance = target(registry)
            if isinstance(instance, Compiler):
                return instance
        raise TypeError(f"Compiler plugin {target!r} is not a Compiler subclass or factory")

    @abstractmethod
    def gather_candidates(self) -> Iterable[ClassHandle]:
        """Return the classes this compiler generates stubs for."""

    @abstractmethod
    def process(self, root: StubTree, candidate: ClassHandle) -> None:
        """Add the candidate's generated members to ``root``."""

    def all_classes(self) -> Iterable[ClassHandle]:
        return self.registry.all_classes()

    def qualified_name_of(self, cls: ClassHandle) -> Optional[str]:
        return self.registry.qualified_name(cls)

    def inherited_ancestors_of(self, cls: ClassHandle) -> Sequence[ClassHandle]:
        return self.registry.ancestors(cls)

    def create_path(self, root: StubTree, cls: ClassHandle) -> ClassNode:
        class_path = self.registry.class_path(cls)
        if class_path is None:
            raise CompilerError("Cannot create a stub path for an anonymous class")
        return root.create_path(self.registry.module_of(cls), class_path)
