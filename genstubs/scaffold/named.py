"""Built-in generators that user generators usually subclass."""

from __future__ import annotations

from .base import Argument, Generator, Option


class NamedGenerator(Generator):
    """Generator that targets a single named resource."""

    name = Argument(type="string")

    skip_namespace = Option(type="boolean", default=False)
    force = Option(type="boolean", default=False)

    @property
    def file_name(self) -> str:
        return str(self.name).replace("::", "/").replace("-", "_").lower()


class ModelGenerator(NamedGenerator):
    """Named generator that also takes a list of ``field:type`` attributes."""

    attributes = Argument(type="array", default=[])

    timestamps = Option(type="boolean", default=True)
    parent = Option(type="string")

    def parsed_attributes(self) -> list[tuple[str, str]]:
        parsed = []
        for item in self.attributes or []:
            field_name, _, field_type = str(item).partition(":")
            parsed.append((field_name, field_type or "string"))
        return parsed
