"""Serialize the output tree into ``.pyi`` text."""

from __future__ import annotations

import keyword
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Set

from .tree import ClassNode, ModuleNode, StubTree
from ..logging import get_logger

GENERATED_HEADER = "# Generated by genstubs. Do not edit by hand; run `genstubs generate`."
_INDENT = "    "

_LOGGER = get_logger("stubs.render")


def render_tree(tree: StubTree) -> Dict[PurePosixPath, str]:
    """Render every module in the tree, keyed by its stub path (``a/b/c.pyi``).

    A module that is the parent of another rendered module is placed at
    ``a/__init__.pyi`` so its submodule stubs stay importable.
    """
    modules = list(tree.modules())
    names = [module.name for module in modules]
    packages = {name for name in names if any(other.startswith(name + ".") for other in names)}
    return {
        stub_path_for(module.name, package=module.name in packages): render_module(module)
        for module in modules
    }


def stub_path_for(module: str, *, package: bool = False) -> PurePosixPath:
    parts = [part for part in module.split(".") if part]
    if not parts:
        raise ValueError("Cannot place stubs for an unnamed module")
    if package:
        return PurePosixPath(*parts, "__init__.pyi")
    return PurePosixPath(*parts).with_suffix(".pyi")


def render_module(module: ModuleNode) -> str:
    typing_names: Set[str] = set()
    for node in module.classes.values():
        typing_names.update(_collect_typing_names(node))

    lines: List[str] = [GENERATED_HEADER]
    if typing_names:
        lines.append("")
        lines.append(f"from typing import {', '.join(sorted(typing_names))}")
    for name in sorted(module.classes):
        lines.extend(["", ""])
        lines.extend(_render_class(module.classes[name], depth=0))
    return "\n".join(lines) + "\n"


def _render_class(node: ClassNode, *, depth: int) -> List[str]:
    pad = _INDENT * depth
    inner = pad + _INDENT
    lines = [f"{pad}class {node.name}:"]
    body: List[str] = []
    for accessor in node.accessors:
        if not _is_identifier(accessor.name):
            _LOGGER.warning(
                "Skipping accessor %r on %s: not a valid Python identifier",
                accessor.name,
                node.name,
            )
            continue
        body.append(f"{inner}@property")
        body.append(f"{inner}def {accessor.name}(self) -> {accessor.return_type.render()}: ...")
    for name in sorted(node.children):
        body.extend(_render_class(node.children[name], depth=depth + 1))
    if not body:
        body.append(f"{inner}...")
    lines.extend(body)
    return lines


def _collect_typing_names(node: ClassNode) -> Iterable[str]:
    for accessor in node.accessors:
        if _is_identifier(accessor.name):
            yield from accessor.return_type.typing_names()
    for child in node.children.values():
        yield from _collect_typing_names(child)


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


__all__ = ["GENERATED_HEADER", "render_module", "render_tree", "stub_path_for"]
