"""Core data models shared across genstubs components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class TypeTag(str, Enum):
    """Declared type of a generator argument or option."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    HASH = "hash"
    NUMERIC = "numeric"
    STRING = "string"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Any) -> "TypeTag":
        """Map loosely-typed declaration metadata to a tag, defaulting to OTHER."""
        if isinstance(value, TypeTag):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.OTHER
        return cls.OTHER


@dataclass(frozen=True)
class ArgumentSpec:
    """Normalized declaration of one positional argument or named option."""

    name: str
    type: TypeTag = TypeTag.OTHER
    required: bool = False
    has_default: bool = False

    @classmethod
    def from_declaration(cls, declaration: Any, *, name: str | None = None) -> "ArgumentSpec":
        """Build a spec from a declaration object or mapping.

        Only presence of a default matters: a declaration exposing ``has_default``
        wins, otherwise any non-``None`` ``default`` counts as present.
        """
        if isinstance(declaration, Mapping):
            lookup = declaration.get
        else:
            def lookup(key: str, fallback: Any = None) -> Any:
                return getattr(declaration, key, fallback)

        resolved_name = name if name is not None else lookup("name")
        if not resolved_name:
            raise ValueError("Argument declarations require a name")

        has_default = lookup("has_default")
        if has_default is None:
            has_default = lookup("default") is not None

        return cls(
            name=str(resolved_name),
            type=TypeTag.coerce(lookup("type")),
            required=bool(lookup("required", False)),
            has_default=bool(has_default),
        )


@dataclass(frozen=True)
class TypeDescriptor:
    """Inferred return type of a generated accessor."""

    annotation: str
    nilable: bool = False

    def render(self) -> str:
        if self.nilable:
            return f"Optional[{self.annotation}]"
        return self.annotation

    def typing_names(self) -> set[str]:
        """Return the names this annotation needs from :mod:`typing`."""
        names: set[str] = set()
        if self.nilable:
            names.add("Optional")
        if self.annotation == "Any":
            names.add("Any")
        return names

    def __str__(self) -> str:
        return self.render()
