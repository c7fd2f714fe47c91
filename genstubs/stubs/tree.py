"""Output tree populated by compilers and rendered into stub files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from ..models import TypeDescriptor


@dataclass
class Accessor:
    """Zero-argument accessor with an inferred return type."""

    name: str
    return_type: TypeDescriptor


@dataclass
class ClassNode:
    """Generated body of one class, including nested classes."""

    name: str
    accessors: List[Accessor] = field(default_factory=list)
    children: Dict[str, "ClassNode"] = field(default_factory=dict)

    def create_accessor(self, name: str, return_type: TypeDescriptor) -> Accessor:
        """Append an accessor, replacing an existing one with the same name."""
        accessor = Accessor(name=name, return_type=return_type)
        for index, existing in enumerate(self.accessors):
            if existing.name == name:
                self.accessors[index] = accessor
                return accessor
        self.accessors.append(accessor)
        return accessor

    def create_child(self, name: str) -> "ClassNode":
        node = self.children.get(name)
        if node is None:
            node = ClassNode(name=name)
            self.children[name] = node
        return node

    def is_empty(self) -> bool:
        return not self.accessors and all(child.is_empty() for child in self.children.values())


@dataclass
class ModuleNode:
    """All generated classes belonging to one Python module."""

    name: str
    classes: Dict[str, ClassNode] = field(default_factory=dict)


class StubTree:
    """Root of the output tree for one generation run."""

    def __init__(self) -> None:
        self._modules: Dict[str, ModuleNode] = {}

    def create_path(self, module: str, class_path: str) -> ClassNode:
        """Create or fetch the node for ``class_path`` (``Outer.Inner``) in ``module``."""
        if not class_path:
            raise ValueError("class_path must name at least one class")
        module_node = self._modules.get(module)
        if module_node is None:
            module_node = ModuleNode(name=module)
            self._modules[module] = module_node

        head, *rest = class_path.split(".")
        node = module_node.classes.get(head)
        if node is None:
            node = ClassNode(name=head)
            module_node.classes[head] = node
        for segment in rest:
            node = node.create_child(segment)
        return node

    def modules(self) -> Iterator[ModuleNode]:
        for name in sorted(self._modules):
            yield self._modules[name]

    def get(self, module: str, class_path: str) -> ClassNode | None:
        module_node = self._modules.get(module)
        if module_node is None:
            return None
        head, *rest = class_path.split(".")
        node = module_node.classes.get(head)
        for segment in rest:
            if node is None:
                return None
            node = node.children.get(segment)
        return node

    def __len__(self) -> int:
        return len(self._modules)

    def __bool__(self) -> bool:
        return bool(self._modules)
