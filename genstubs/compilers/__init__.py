"""Compiler plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Sequence, Tuple

from .base import Compiler, CompilerError
from .generators import BaseClassResolutionError, GeneratorCompiler
from ..registry import ClassRegistry

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import GenStubsConfig

_ENTRY_POINT_GROUP = "genstubs.compilers"

_BUILTIN_COMPILERS: dict[str, type[Compiler]] = {
    GeneratorCompiler.name: GeneratorCompiler,
}


def discover_compilers(
    registry: ClassRegistry,
    enabled: Sequence[str] | None = None,
    config: Optional["GenStubsConfig"] = None,
) -> List[Compiler]:
    """Return instantiated compilers bound to ``registry``, honoring optional enabled names.

    Built-in compilers come first; an entry point whose name (case-insensitive)
    is already taken is ignored.
    """
    wanted = None if enabled is None else {name.lower() for name in enabled}
    compilers: Dict[str, Compiler] = {}
    for name, target in _compiler_targets():
        key = name.lower()
        if key in compilers or (wanted is not None and key not in wanted):
            continue
        compilers[key] = Compiler.instantiate(target, registry, config)

    unknown = sorted(wanted.difference(compilers)) if wanted is not None else []
    if unknown:
        raise ValueError(f"Unknown compilers requested: {', '.join(unknown)}")
    return list(compilers.values())


def _compiler_targets() -> Iterator[Tuple[str, object]]:
    yield from _BUILTIN_COMPILERS.items()
    for entry in metadata.entry_points().select(group=_ENTRY_POINT_GROUP):
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load compiler entry point '{entry.name}': {exc}") from exc
        yield entry.name, loaded


__all__ = [
    "BaseClassResolutionError",
    "Compiler",
    "CompilerError",
    "GeneratorCompiler",
    "discover_compilers",
]
