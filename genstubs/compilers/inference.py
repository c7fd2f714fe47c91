"""Return-type inference for declared generator members."""

from __future__ import annotations

from typing import Dict

from ..models import ArgumentSpec, TypeDescriptor, TypeTag

BASE_ANNOTATIONS: Dict[TypeTag, str] = {
    TypeTag.ARRAY: "list[str]",
    TypeTag.BOOLEAN: "bool",
    TypeTag.HASH: "dict[str, str]",
    TypeTag.NUMERIC: "float",
    TypeTag.STRING: "str",
    TypeTag.OTHER: "Any",
}


def type_for(spec: ArgumentSpec) -> TypeDescriptor:
    """Infer the accessor type for ``spec``.

    A member that is neither required nor defaulted may be unset at runtime, so
    its descriptor is nilable whatever its tag, ``Any`` included.
    """
    annotation = BASE_ANNOTATIONS.get(TypeTag.coerce(spec.type), BASE_ANNOTATIONS[TypeTag.OTHER])
    nilable = not (spec.required or spec.has_default)
    return TypeDescriptor(annotation=annotation, nilable=nilable)


__all__ = ["BASE_ANNOTATIONS", "type_for"]
