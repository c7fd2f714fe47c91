"""Declarative generator framework whose classes genstubs compiles."""

from __future__ import annotations

import copy
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Tuple

_MISSING: Any = object()


class GeneratorArgumentError(ValueError):
    """Raised when a generator is instantiated with invalid arguments or options."""


def _infer_type(default: Any) -> Optional[str]:
    if default is _MISSING or default is None:
        return None
    if isinstance(default, bool):
        return "boolean"
    if isinstance(default, (int, float)):
        return "numeric"
    if isinstance(default, (list, tuple)):
        return "array"
    if isinstance(default, dict):
        return "hash"
    if isinstance(default, str):
        return "string"
    return None


class _Declaration:
    """Class-body descriptor recording one generator member."""

    kind: ClassVar[str] = ""

    def __init__(
        self,
        type: Optional[str] = None,
        *,
        required: Optional[bool] = None,
        default: Any = _MISSING,
    ) -> None:
        self.name: Optional[str] = None
        self.type = type if type is not None else _infer_type(default)
        self.default = default
        self.required = self._default_required() if required is None else bool(required)

    def _default_required(self) -> bool:
        return False

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    def resolve_default(self) -> Any:
        return copy.deepcopy(self.default)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance._values.get(self.name)

    def __repr__(self) -> str:
        default = "" if not self.has_default else f", default={self.default!r}"
        return (
            f"{self.__class__.__name__}({self.name!r}, type={self.type!r}, "
            f"required={self.required}{default})"
        )


class Argument(_Declaration):
    """Positional argument; required unless it declares a default."""

    kind = "argument"

    def _default_required(self) -> bool:
        return not self.has_default


class Option(_Declaration):
    """Named option; optional unless declared ``required=True``."""

    kind = "option"


class Generator:
    """Root of every generator.

    Subclasses declare members in the class body; declarations are collected
    into ``arguments`` (ordered, inherited first) and ``class_options``. A
    redeclared name replaces the inherited declaration in place.
    """

    arguments: ClassVar[Tuple[Argument, ...]] = ()
    class_options: ClassVar[Dict[str, Option]] = {}

    pretend = Option(type="boolean", default=False)
    quiet = Option(type="boolean", default=False)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _collect_declarations(cls)

    def __init__(
        self,
        args: Sequence[Any] = (),
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        values: Dict[str, Any] = {}
        args = list(args)
        if len(args) > len(self.arguments):
            raise GeneratorArgumentError(
                f"{type(self).__name__} takes {len(self.arguments)} argument(s), got {len(args)}"
            )
        for index, argument in enumerate(self.arguments):
            if index < len(args):
                values[argument.name] = args[index]
            elif argument.has_default:
                values[argument.name] = argument.resolve_default()
            elif argument.required:
                raise GeneratorArgumentError(f"Missing required argument '{argument.name}'")

        supplied = dict(options or {})
        unknown = sorted(set(supplied) - set(self.class_options))
        if unknown:
            raise GeneratorArgumentError(f"Unknown option(s): {', '.join(unknown)}")
        for name, option in self.class_options.items():
            if name in supplied:
                values[name] = supplied[name]
            elif option.has_default:
                values[name] = option.resolve_default()
            elif option.required:
                raise GeneratorArgumentError(f"Missing required option '{name}'")

        self._values = values

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)


def _collect_declarations(cls: type) -> None:
    arguments = list(getattr(cls, "arguments", ()))
    options = dict(getattr(cls, "class_options", {}))
    for attribute, value in vars(cls).items():
        if isinstance(value, Argument):
            for index, inherited in enumerate(arguments):
                if inherited.name == attribute:
                    arguments[index] = value
                    break
            else:
                arguments.append(value)
        elif isinstance(value, Option):
            options[attribute] = value
    cls.arguments = tuple(arguments)
    cls.class_options = options


_collect_declarations(Generator)


__all__ = ["Argument", "Generator", "GeneratorArgumentError", "Option"]
