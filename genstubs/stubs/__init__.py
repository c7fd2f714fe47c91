"""Stub output tree, ``.pyi`` rendering and file placement."""

from .render import GENERATED_HEADER, render_module, render_tree, stub_path_for
from .tree import Accessor, ClassNode, ModuleNode, StubTree
from .writer import StubCheckResult, StubWriter, WriteResult

__all__ = [
    "Accessor",
    "ClassNode",
    "GENERATED_HEADER",
    "ModuleNode",
    "StubCheckResult",
    "StubTree",
    "StubWriter",
    "WriteResult",
    "render_module",
    "render_tree",
    "stub_path_for",
]
