"""Tests for the generator stub compiler."""

from __future__ import annotations

import logging

import pytest

from genstubs.compilers import BaseClassResolutionError, GeneratorCompiler
from genstubs.models import TypeDescriptor
from genstubs.stubs import Accessor, StubTree, render_tree
from tests._fixtures.graph_builder import GraphBuilder, spec


def _accessors(tree: StubTree, module: str, class_path: str) -> list[tuple[str, str]]:
    node = tree.get(module, class_path)
    assert node is not None
    return [(accessor.name, accessor.return_type.render()) for accessor in node.accessors]


def test_gather_candidates_selects_named_user_subclasses(graph: GraphBuilder) -> None:
    zeta = graph.subclass("app.generators.ZetaGenerator", graph.named)
    alpha = graph.subclass("app.generators.AlphaGenerator", graph.root)
    graph.subclass(None, graph.named)
    graph.registry.define("app.models.User")

    candidates = list(GeneratorCompiler(graph.registry).gather_candidates())

    assert candidates == [alpha, zeta]


def test_gather_candidates_excludes_builtin_namespaces(graph: GraphBuilder) -> None:
    graph.subclass("genstubs.scaffold.extra.MigrationGenerator", graph.named)
    user = graph.subclass("app.generators.UserGenerator", graph.named)

    candidates = list(GeneratorCompiler(graph.registry).gather_candidates())

    assert candidates == [user]
    assert graph.root not in candidates
    assert graph.named not in candidates


def test_gather_candidates_without_root_class_is_empty(graph: GraphBuilder) -> None:
    graph.subclass("app.generators.UserGenerator", graph.named)
    compiler = GeneratorCompiler(graph.registry, root_class="framework.missing.Base")

    assert list(compiler.gather_candidates()) == []


def test_custom_builtin_namespaces_are_honoured(graph: GraphBuilder) -> None:
    vendor = graph.subclass("vendor.generators.ApiGenerator", graph.named)
    user = graph.subclass("app.generators.UserGenerator", vendor)
    compiler = GeneratorCompiler(
        graph.registry,
        builtin_namespaces=[r"^genstubs\.scaffold\.", r"^vendor\."],
    )

    assert list(compiler.gather_candidates()) == [user]
    assert compiler.base_class_for(user) is vendor


def test_base_class_for_returns_nearest_builtin_ancestor(graph: GraphBuilder) -> None:
    parent = graph.subclass("app.generators.BaseAppGenerator", graph.named)
    child = graph.subclass("app.generators.ChildGenerator", parent)

    compiler = GeneratorCompiler(graph.registry)

    assert compiler.base_class_for(child) is graph.named
    assert compiler.base_class_for(parent) is graph.named


def test_base_class_for_raises_when_no_builtin_ancestor(graph: GraphBuilder) -> None:
    user = graph.subclass("app.generators.UserGenerator", graph.named)
    compiler = GeneratorCompiler(graph.registry, builtin_namespaces=[r"^nothing\.matches\."])

    with pytest.raises(BaseClassResolutionError) as excinfo:
        compiler.base_class_for(user)

    assert excinfo.value.class_name == "app.generators.UserGenerator"
    assert "app.generators.UserGenerator" in str(excinfo.value)


def test_process_emits_contributed_argument_and_option(graph: GraphBuilder) -> None:
    service = graph.subclass(
        "app.generators.ServiceGenerator",
        graph.named,
        arguments=[spec("result_type", "string", required=True)],
        options={"skip_comments": spec("skip_comments", "boolean", has_default=True)},
    )
    tree = StubTree()

    GeneratorCompiler(graph.registry).process(tree, service)

    assert _accessors(tree, "app.generators", "ServiceGenerator") == [
        ("result_type", "str"),
        ("skip_comments", "bool"),
    ]


def test_process_without_contributions_creates_no_node(graph: GraphBuilder) -> None:
    plain = graph.subclass("app.generators.PlainGenerator", graph.named)
    tree = StubTree()

    GeneratorCompiler(graph.registry).process(tree, plain)

    assert len(tree) == 0
    assert tree.get("app.generators", "PlainGenerator") is None


def test_option_sharing_an_argument_name_is_kept_with_a_warning(
    graph: GraphBuilder, caplog
) -> None:
    clashing = graph.subclass(
        "app.generators.ClashingGenerator",
        graph.named,
        arguments=[spec("target", "string", required=True)],
        options={"target": spec("target", "boolean", has_default=True)},
    )
    tree = StubTree()

    with caplog.at_level(logging.WARNING, logger="genstubs"):
        GeneratorCompiler(graph.registry).process(tree, clashing)

    assert _accessors(tree, "app.generators", "ClashingGenerator") == [("target", "bool")]
    assert "app.generators.ClashingGenerator" in caplog.text
    assert "'target'" in caplog.text



def test_redeclared_argument_with_new_type_is_contributed(graph: GraphBuilder) -> None:
    retyped = graph.subclass(
        "app.generators.RetypedGenerator",
        graph.named,
        arguments=[spec("name", "numeric", required=True)],
    )
    compiler = GeneratorCompiler(graph.registry)

    arguments, options = compiler.contributed_members(retyped, graph.named)

    assert [argument.name for argument in arguments] == ["name"]
    assert options == {}

    tree = StubTree()
    compiler.process(tree, retyped)
    assert _accessors(tree, "app.generators", "RetypedGenerator") == [("name", "float")]


def test_reordered_inherited_arguments_are_not_contributed(graph: GraphBuilder) -> None:
    base = graph.subclass(
        "genstubs.scaffold.extra.PairGenerator",
        graph.root,
        arguments=[spec("first", required=True), spec("second", required=True)],
    )
    swapped = graph.subclass(
        "app.generators.SwappedGenerator",
        base,
        arguments=[spec("second", required=True), spec("first", required=True)],
        inherit=False,
    )

    arguments, _ = GeneratorCompiler(graph.registry).contributed_members(swapped, base)

    assert arguments == []


def test_option_with_changed_default_presence_is_contributed(graph: GraphBuilder) -> None:
    changed = graph.subclass(
        "app.generators.ChangedGenerator",
        graph.named,
        options={"skip_namespace": spec("skip_namespace", "boolean")},
    )

    _, options = GeneratorCompiler(graph.registry).contributed_members(changed, graph.named)

    assert list(options) == ["skip_namespace"]
    assert options["skip_namespace"].has_default is False


def test_arguments_precede_options_in_declaration_order(graph: GraphBuilder) -> None:
    generator = graph.subclass(
        "app.generators.OrderedGenerator",
        graph.named,
        arguments=[spec("target", "string", required=True), spec("extras", "array")],
        options={
            "mode": spec("mode", "unknown-tag"),
            "settings": spec("settings", "hash", has_default=True),
        },
    )
    tree = StubTree()

    GeneratorCompiler(graph.registry).process(tree, generator)

    assert _accessors(tree, "app.generators", "OrderedGenerator") == [
        ("target", "str"),
        ("extras", "Optional[list[str]]"),
        ("mode", "Optional[Any]"),
        ("settings", "dict[str, str]"),
    ]


def test_processing_twice_does_not_duplicate_accessors(graph: GraphBuilder) -> None:
    generator = graph.subclass(
        "app.generators.TwiceGenerator",
        graph.named,
        options={"dry": spec("dry", "boolean")},
    )
    compiler = GeneratorCompiler(graph.registry)
    tree = StubTree()

    compiler.process(tree, generator)
    compiler.process(tree, generator)

    node = tree.get("app.generators", "TwiceGenerator")
    assert node is not None
    assert node.accessors == [Accessor(name="dry", return_type=TypeDescriptor("bool", nilable=True))]


def test_full_pass_is_reproducible(graph: GraphBuilder) -> None:
    graph.subclass(
        "app.generators.OneGenerator",
        graph.named,
        arguments=[spec("kind", "string", required=True)],
    )
    graph.subclass(
        "app.other.TwoGenerator",
        graph.root,
        options={"count": spec("count", "numeric", has_default=True)},
    )
    compiler = GeneratorCompiler(graph.registry)

    def _run() -> dict:
        tree = StubTree()
        for candidate in compiler.gather_candidates():
            compiler.process(tree, candidate)
        return render_tree(tree)

    first = _run()
    assert first == _run()
    assert sorted(str(path) for path in first) == ["app/generators.pyi", "app/other.pyi"]


def test_nested_candidate_is_placed_under_its_outer_class(graph: GraphBuilder) -> None:
    nested = graph.subclass(
        "app.generators.Outer.InnerGenerator",
        graph.named,
        module="app.generators",
        options={"flag": spec("flag", "boolean", required=True)},
    )
    tree = StubTree()

    GeneratorCompiler(graph.registry).process(tree, nested)

    assert _accessors(tree, "app.generators", "Outer.InnerGenerator") == [("flag", "bool")]
