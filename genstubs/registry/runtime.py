"""Registry backed by the live classes of the running interpreter."""

from __future__ import annotations

import sys
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Set

from .base import ClassRegistry
from ..logging import get_logger
from ..models import ArgumentSpec

_LOGGER = get_logger("registry.runtime")


class RuntimeClassRegistry(ClassRegistry):
    """Reflects over every class reachable from ``object`` in this process.

    Declarations are read from two class attributes: an ordered collection of
    argument declarations and a mapping of option declarations. Each entry is
    normalized with :meth:`ArgumentSpec.from_declaration`, so any object that
    exposes ``name``/``type``/``required``/``default`` works.
    """

    def __init__(
        self,
        *,
        arguments_attr: str = "arguments",
        options_attr: str = "class_options",
    ) -> None:
        self._arguments_attr = arguments_attr
        self._options_attr = options_attr

    def all_classes(self) -> Iterator[type]:
        seen: Set[int] = set()
        stack: List[type] = [object]
        while stack:
            cls = stack.pop()
            if id(cls) in seen:
                continue
            seen.add(id(cls))
            yield cls
            try:
                stack.extend(type.__subclasses__(cls))
            except TypeError:  # pragma: no cover - exotic metaclasses
                continue

    def qualified_name(self, cls: type) -> Optional[str]:
        module = getattr(cls, "__module__", None)
        qualname = getattr(cls, "__qualname__", None)
        if not isinstance(module, str) or not isinstance(qualname, str):
            return None
        if "<locals>" in qualname:
            return None
        return f"{module}.{qualname}"

    def module_of(self, cls: type) -> str:
        return str(getattr(cls, "__module__", "") or "")

    def ancestors(self, cls: type) -> Sequence[type]:
        return tuple(cls.__mro__[1:])

    def is_subtype(self, cls: type, other: type) -> bool:
        if cls is other:
            return False
        try:
            return issubclass(cls, other)
        except TypeError:
            return False

    def declared_arguments(self, cls: type) -> List[ArgumentSpec]:
        declarations = getattr(cls, self._arguments_attr, None)
        if declarations is None or isinstance(declarations, (str, bytes, Mapping)):
            return []
        try:
            return [ArgumentSpec.from_declaration(item) for item in declarations]
        except TypeError:
            _LOGGER.debug("Ignoring non-iterable %s on %r", self._arguments_attr, cls)
            return []

    def declared_options(self, cls: type) -> Dict[str, ArgumentSpec]:
        declarations = getattr(cls, self._options_attr, None)
        if not isinstance(declarations, Mapping):
            return {}
        return {
            str(name): ArgumentSpec.from_declaration(item, name=str(name))
            for name, item in declarations.items()
        }

    def lookup(self, qualified_name: str) -> Optional[type]:
        parts = qualified_name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module = sys.modules.get(".".join(parts[:split]))
            if module is None:
                continue
            target: Any = module
            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    break
            if isinstance(target, type):
                return target
        return None
