"""In-memory registry over a synthetic, single-inheritance class graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from .base import ClassRegistry
from ..models import ArgumentSpec


@dataclass(eq=False)
class SyntheticClass:
    """Stand-in for a class: a name, a parent and member declarations.

    ``name`` is the class path inside ``module``; ``None`` models an anonymous
    class. Instances compare by identity, like real classes.
    """

    module: str
    name: Optional[str]
    base: Optional["SyntheticClass"] = None
    arguments: List[ArgumentSpec] = field(default_factory=list)
    options: Dict[str, ArgumentSpec] = field(default_factory=dict)

    @property
    def qualified_name(self) -> Optional[str]:
        if self.name is None:
            return None
        return f"{self.module}.{self.name}" if self.module else self.name

    def __repr__(self) -> str:
        return f"SyntheticClass({self.qualified_name or '<anonymous>'})"


class StaticClassRegistry(ClassRegistry):
    """Registry whose universe is exactly the classes it was given."""

    def __init__(self, classes: Iterable[SyntheticClass] = ()) -> None:
        self._classes: List[SyntheticClass] = []
        self._by_name: Dict[str, SyntheticClass] = {}
        for cls in classes:
            self.add(cls)

    def add(self, cls: SyntheticClass) -> SyntheticClass:
        self._classes.append(cls)
        if cls.qualified_name is not None:
            self._by_name[cls.qualified_name] = cls
        return cls

    def define(
        self,
        qualified_name: Optional[str],
        *,
        base: Optional[SyntheticClass] = None,
        arguments: Sequence[ArgumentSpec] = (),
        options: Optional[Mapping[str, ArgumentSpec]] = None,
        module: Optional[str] = None,
    ) -> SyntheticClass:
        """Create and register a class.

        Without an explicit ``module`` the last dotted segment of
        ``qualified_name`` is the class and the rest is the module.
        """
        if qualified_name is None:
            cls = SyntheticClass(module=module or "", name=None, base=base)
        elif module is not None:
            prefix = f"{module}."
            name = qualified_name[len(prefix):] if qualified_name.startswith(prefix) else qualified_name
            cls = SyntheticClass(module=module, name=name, base=base)
        else:
            owner, _, name = qualified_name.rpartition(".")
            cls = SyntheticClass(module=owner, name=name, base=base)
        cls.arguments = list(arguments)
        cls.options = dict(options or {})
        return self.add(cls)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StaticClassRegistry":
        """Build a registry from ``{"classes": [...]}`` JSON-style data.

        Each class entry holds ``module``, ``name``, an optional ``base``
        (qualified name of another entry), a list of ``arguments`` and a
        mapping of ``options``. Entries may appear in any order.
        """
        entries = payload.get("classes") or []
        if not isinstance(entries, list):
            raise ValueError("'classes' must be a list")

        registry = cls()
        pending: List[tuple[SyntheticClass, Optional[str]]] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise ValueError("Each class entry must be a mapping")
            synthetic = SyntheticClass(
                module=str(entry.get("module") or ""),
                name=entry.get("name"),
                arguments=[
                    ArgumentSpec.from_declaration(item) for item in entry.get("arguments") or []
                ],
                options={
                    str(name): ArgumentSpec.from_declaration(item, name=str(name))
                    for name, item in (entry.get("options") or {}).items()
                },
            )
            registry.add(synthetic)
            pending.append((synthetic, entry.get("base")))

        for synthetic, base_name in pending:
            if not base_name:
                continue
            base = registry.lookup(str(base_name))
            if base is None:
                raise ValueError(
                    f"Unknown base {base_name!r} for {synthetic.qualified_name or '<anonymous>'}"
                )
            synthetic.base = base
        return registry

    def all_classes(self) -> Iterator[SyntheticClass]:
        return iter(list(self._classes))

    def qualified_name(self, cls: SyntheticClass) -> Optional[str]:
        return cls.qualified_name

    def module_of(self, cls: SyntheticClass) -> str:
        return cls.module

    def ancestors(self, cls: SyntheticClass) -> Sequence[SyntheticClass]:
        chain: List[SyntheticClass] = []
        current = cls.base
        while current is not None:
            if current is cls or current in chain:
                raise ValueError(f"Inheritance cycle detected at {current!r}")
            chain.append(current)
            current = current.base
        return chain

    def is_subtype(self, cls: SyntheticClass, other: SyntheticClass) -> bool:
        return any(ancestor is other for ancestor in self.ancestors(cls))

    def declared_arguments(self, cls: SyntheticClass) -> List[ArgumentSpec]:
        return list(cls.arguments)

    def declared_options(self, cls: SyntheticClass) -> Dict[str, ArgumentSpec]:
        return dict(cls.options)

    def lookup(self, qualified_name: str) -> Optional[SyntheticClass]:
        return self._by_name.get(qualified_name)
