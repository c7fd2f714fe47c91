"""Tests for the output tree and .pyi rendering."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from genstubs.models import TypeDescriptor
from genstubs.stubs import GENERATED_HEADER, StubTree, render_tree, stub_path_for
from tests._fixtures.output_helpers import template


def test_create_path_fetches_existing_nodes() -> None:
    tree = StubTree()
    first = tree.create_path("app.generators", "Outer.Inner")
    second = tree.create_path("app.generators", "Outer.Inner")
    assert first is second
    assert len(tree) == 1


def test_create_path_requires_a_class() -> None:
    with pytest.raises(ValueError):
        StubTree().create_path("app", "")


def test_stub_path_for_module() -> None:
    assert stub_path_for("app.generators.service") == PurePosixPath("app/generators/service.pyi")
    assert stub_path_for("single") == PurePosixPath("single.pyi")
    assert stub_path_for("app", package=True) == PurePosixPath("app/__init__.pyi")


def test_parent_module_renders_as_package_init() -> None:
    tree = StubTree()
    tree.create_path("app", "RootGenerator").create_accessor("flag", TypeDescriptor("bool"))
    tree.create_path("app.generators", "ServiceGenerator").create_accessor(
        "flag", TypeDescriptor("bool")
    )
    tree.create_path("application", "Other").create_accessor("flag", TypeDescriptor("bool"))

    assert sorted(render_tree(tree)) == [
        PurePosixPath("app/__init__.pyi"),
        PurePosixPath("app/generators.pyi"),
        PurePosixPath("application.pyi"),
    ]


def test_render_without_typing_imports() -> None:
    tree = StubTree()
    node = tree.create_path("app", "Thing")
    node.create_accessor("flag", TypeDescriptor("bool"))

    assert render_tree(tree) == {
        PurePosixPath("app.pyi"): template(
            f"""
            {GENERATED_HEADER}


            class Thing:
                @property
                def flag(self) -> bool: ...
            """
        )
    }


def test_render_imports_only_used_typing_names() -> None:
    tree = StubTree()
    tree.create_path("app", "A").create_accessor("count", TypeDescriptor("float", nilable=True))

    text = render_tree(tree)[PurePosixPath("app.pyi")]

    assert "from typing import Optional\n" in text
    assert "Any" not in text
    assert "def count(self) -> Optional[float]: ..." in text


def test_render_skips_accessors_that_are_not_identifiers() -> None:
    tree = StubTree()
    node = tree.create_path("app", "Thing")
    node.create_accessor("skip-tests", TypeDescriptor("Any", nilable=True))
    node.create_accessor("class", TypeDescriptor("str"))

    text = render_tree(tree)[PurePosixPath("app.pyi")]

    assert "skip-tests" not in text
    assert "def class" not in text
    assert "from typing" not in text
    assert text.rstrip().endswith("class Thing:\n    ...")
