"""Tests for the declarative generator framework."""

from __future__ import annotations

import pytest

from genstubs.scaffold import (
    Argument,
    Generator,
    GeneratorArgumentError,
    ModelGenerator,
    NamedGenerator,
    Option,
)


def test_declarations_are_collected_with_inherited_first() -> None:
    class ApiGenerator(NamedGenerator):
        version = Argument(type="numeric", default=1)
        dry = Option(type="boolean")

    assert [argument.name for argument in ApiGenerator.arguments] == ["name", "version"]
    assert list(ApiGenerator.class_options) == [
        "pretend",
        "quiet",
        "skip_namespace",
        "force",
        "dry",
    ]
    assert NamedGenerator.arguments == (NamedGenerator.__dict__["name"],)


def test_redeclared_argument_replaces_inherited_in_place() -> None:
    class SchemaGenerator(ModelGenerator):
        name = Argument(type="array", default=[])

    assert [argument.name for argument in SchemaGenerator.arguments] == ["name", "attributes"]
    assert SchemaGenerator.arguments[0].type == "array"
    assert ModelGenerator.arguments[0].type == "string"


def test_argument_required_unless_defaulted() -> None:
    assert Argument(type="string").required is True
    assert Argument(type="string", default="x").required is False
    assert Option(type="string").required is False
    assert Option(type="string", required=True).required is True


def test_option_type_is_inferred_from_default() -> None:
    assert Option(default=False).type == "boolean"
    assert Option(default=3).type == "numeric"
    assert Option(default=["a"]).type == "array"
    assert Option(default={}).type == "hash"
    assert Option(default="x").type == "string"
    assert Option().type is None


def test_instances_bind_arguments_and_options() -> None:
    generator = ModelGenerator(["Post", ["title:string", "body"]], {"parent": "Record"})

    assert generator.name == "Post"
    assert generator.file_name == "post"
    assert generator.parsed_attributes() == [("title", "string"), ("body", "string")]
    assert generator.timestamps is True
    assert generator.parent == "Record"
    assert generator.pretend is False


def test_defaults_are_not_shared_between_instances() -> None:
    first = ModelGenerator(["A"])
    first.attributes.append("x:string")
    assert ModelGenerator(["B"]).attributes == []


def test_missing_required_argument_raises() -> None:
    with pytest.raises(GeneratorArgumentError, match="name"):
        NamedGenerator()


def test_unknown_option_raises() -> None:
    with pytest.raises(GeneratorArgumentError, match="bogus"):
        NamedGenerator(["x"], {"bogus": True})


def test_too_many_arguments_raises() -> None:
    with pytest.raises(GeneratorArgumentError):
        Generator(["unexpected"])


def test_required_option_must_be_supplied() -> None:
    class StrictGenerator(Generator):
        token = Option(type="string", required=True)

    with pytest.raises(GeneratorArgumentError, match="token"):
        StrictGenerator()
    assert StrictGenerator(options={"token": "t"}).token == "t"
