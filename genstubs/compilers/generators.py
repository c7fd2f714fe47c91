"""Stub compiler for scaffold generator classes.

Given a generator declared with the scaffold framework::

    # myapp/generators.py
    class ServiceGenerator(NamedGenerator):
        result_type = Argument(type="string")
        skip_comments = Option(type="boolean", default=False)

the compiler produces ``myapp/generators.pyi``::

    class ServiceGenerator:
        @property
        def result_type(self) -> str: ...
        @property
        def skip_comments(self) -> bool: ...

Only members the class adds on top of its nearest built-in generator are
emitted; inherited framework members are described by the framework itself.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Pattern, Sequence, Tuple

from .base import Compiler, CompilerError
from .inference import type_for
from ..logging import get_logger
from ..models import ArgumentSpec
from ..registry import ClassHandle, ClassRegistry
from ..stubs import StubTree

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import GenStubsConfig

DEFAULT_ROOT_CLASS = "genstubs.scaffold.base.Generator"
DEFAULT_BUILTIN_NAMESPACES: Tuple[str, ...] = (r"^genstubs\.scaffold\.",)


class BaseClassResolutionError(CompilerError):
    """Raised when a generator has no built-in ancestor to diff against."""


class GeneratorCompiler(Compiler):
    """Emits typed accessors for the arguments and options a generator adds."""

    name = "generators"

    def __init__(
        self,
        registry: ClassRegistry,
        *,
        root_class: Optional[str] = None,
        builtin_namespaces: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(registry)
        self.root_class = root_class or DEFAULT_ROOT_CLASS
        patterns = builtin_namespaces if builtin_namespaces else DEFAULT_BUILTIN_NAMESPACES
        self.builtin_patterns: List[Pattern[str]] = [re.compile(pattern) for pattern in patterns]
        self.logger = get_logger("compilers.generators")

    @classmethod
    def from_config(
        cls, registry: ClassRegistry, config: Optional["GenStubsConfig"]
    ) -> "GeneratorCompiler":
        if config is None:
            return cls(registry)
        return cls(
            registry,
            root_class=config.generators.root_class,
            builtin_namespaces=config.generators.builtin_namespaces or None,
        )

    def gather_candidates(self) -> Iterator[ClassHandle]:
        root = self.registry.lookup(self.root_class)
        if root is None:
            self.logger.debug("Root generator %s is not loaded; nothing to compile", self.root_class)
            return iter(())

        selected: List[Tuple[str, ClassHandle]] = []
        for cls in self.all_classes():
            name = self.qualified_name_of(cls)
            if name is None or self.is_builtin(name):
                continue
            if self.registry.is_subtype(cls, root):
                selected.append((name, cls))
        selected.sort(key=lambda item: item[0])
        return (cls for _, cls in selected)

    def process(self, root: StubTree, candidate: ClassHandle) -> None:
        base = self.base_class_for(candidate)
        try:
            arguments, options = self.contributed_members(candidate, base)
        except (TypeError, ValueError) as exc:
            class_name = self.qualified_name_of(candidate) or repr(candidate)
            raise CompilerError(
                f"{class_name} has an unreadable declaration: {exc}", class_name=class_name
            ) from exc
        if not arguments and not options:
            return

        klass = self.create_path(root, candidate)
        for argument in arguments:
            klass.create_accessor(argument.name, type_for(argument))
        argument_names = {argument.name for argument in arguments}
        for name, option in options.items():
            if name in argument_names:
                self.logger.warning(
                    "%s declares both an argument and an option named %r; the option's accessor is kept",
                    self.qualified_name_of(candidate),
                    name,
                )
            klass.create_accessor(name, type_for(option))

    def is_builtin(self, qualified_name: str) -> bool:
        return any(pattern.search(qualified_name) for pattern in self.builtin_patterns)

    def base_class_for(self, candidate: ClassHandle) -> ClassHandle:
        """Return the nearest ancestor that belongs to a built-in namespace."""
        for ancestor in self.inherited_ancestors_of(candidate):
            name = self.qualified_name_of(ancestor)
            if name is not None and self.is_builtin(name):
                return ancestor

        class_name = self.qualified_name_of(candidate) or repr(candidate)
        patterns = ", ".join(pattern.pattern for pattern in self.builtin_patterns)
        raise BaseClassResolutionError(
            f"{class_name} has no ancestor matching the built-in namespaces ({patterns}); "
            f"check that {self.root_class} itself matches one of them",
            class_name=class_name,
        )

    def contributed_members(
        self, candidate: ClassHandle, base: ClassHandle
    ) -> Tuple[List[ArgumentSpec], Dict[str, ArgumentSpec]]:
        """Return the arguments and options ``candidate`` adds on top of ``base``.

        Equality is structural and ignores argument position, so an inherited
        argument that was only reordered still counts as inherited.
        """
        base_arguments = self.registry.declared_arguments(base)
        arguments = [
            argument
            for argument in self.registry.declared_arguments(candidate)
            if argument not in base_arguments
        ]

        base_options = self.registry.declared_options(base)
        options = {
            name: option
            for name, option in self.registry.declared_options(candidate).items()
            if base_options.get(name) != option
        }
        return arguments, options


__all__ = [
    "BaseClassResolutionError",
    "DEFAULT_BUILTIN_NAMESPACES",
    "DEFAULT_ROOT_CLASS",
    "GeneratorCompiler",
]
