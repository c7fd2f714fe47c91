"""Reflection sources that compilers read class graphs from."""

from .base import ClassHandle, ClassRegistry
from .runtime import RuntimeClassRegistry
from .static import StaticClassRegistry, SyntheticClass

__all__ = [
    "ClassHandle",
    "ClassRegistry",
    "RuntimeClassRegistry",
    "StaticClassRegistry",
    "SyntheticClass",
]
