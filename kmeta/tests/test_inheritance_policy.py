import pytest

from kmeta.core.policy_engine.inheritance_policy import (
    AllowListInheritance,
    InheritanceController,
    InheritEverything,
    InheritNothing,
    PredicateInheritance,
    PrefixInheritance,
)


def test_base_controller_is_abstract():
    with pytest.raises(NotImplementedError):
        InheritanceController().is_label_inherited("a")

    with pytest.raises(NotImplementedError):
        InheritanceController().is_annotation_inherited("a")


def test_trivial_controllers():
    assert InheritEverything().is_label_inherited("anything")
    assert InheritEverything().is_annotation_inherited("anything")
    assert not InheritNothing().is_label_inherited("anything")
    assert not InheritNothing().is_annotation_inherited("anything")


def test_allow_list_exact_and_glob_patterns():
    c = AllowListInheritance(
        labels=["app", "example.com/*"],
        annotations=["categories"],
    )

    assert c.is_label_inherited("app")
    assert c.is_label_inherited("example.com/tier")
    assert not c.is_label_inherited("application")
    assert not c.is_label_inherited("App")
    assert c.is_annotation_inherited("categories")
    assert not c.is_annotation_inherited("app")


def test_allow_list_is_immutable_and_normalized_to_tuples():
    c = AllowListInheritance(labels=["a"])
    assert c.labels == ("a",)

    with pytest.raises(Exception):
        c.labels = ("b",)


def test_allow_list_rejects_bare_string_and_non_strings():
    with pytest.raises(TypeError):
        AllowListInheritance(labels="app")

    with pytest.raises(TypeError):
        AllowListInheritance(annotations=[1])


def test_prefix_controller():
    c = PrefixInheritance(label_prefixes=("example.com/",), annotation_prefixes=())

    assert c.is_label_inherited("example.com/team")
    assert not c.is_label_inherited("other.com/team")
    assert not c.is_annotation_inherited("example.com/team")


def test_predicate_controller_adapts_callables():
    c = PredicateInheritance(
        label_predicate=lambda k: k == "x",
        annotation_predicate=lambda k: k != "x",
    )

    assert c.is_label_inherited("x")
    assert not c.is_annotation_inherited("x")

    with pytest.raises(TypeError):
        PredicateInheritance(label_predicate="nope", annotation_predicate=lambda k: True)
