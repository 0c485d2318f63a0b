"""Public API extraction over hand-built trees.

Covers visibility tracking (private, private_class_method, class << self),
scope naming for nested classes/modules, root handling and InvalidRootKind.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))
from conftest import PRIVATE, call, cls, defn, defs, mod, other, sclass, seq, sym

from specsentry.public_api import (
    InvalidRootKind,
    NodeKind,
    TreeNode,
    extract_public_methods,
    public_methods_for_scope,
    singleton_block_methods,
)


def _displays(root):
    return sorted(str(e) for e in extract_public_methods(root))


# ===========================================================================
# Instance methods and private
# ===========================================================================


class TestInstanceMethods:
    def test_single_public_method(self):
        entries = extract_public_methods(cls("Foo", defn("bar", line=2)))
        assert len(entries) == 1
        entry = entries[0]
        assert entry.is_instance_method is True
        assert entry.display == "Foo#bar"
        assert entry.scope_name == "Foo"
        assert entry.method_name == "bar"
        assert entry.source_line == 2

    def test_module_method_is_instance_method(self):
        assert _displays(mod("Foo", defn("some_method"))) == ["Foo#some_method"]

    def test_private_hides_later_defs(self):
        root = cls("Foo", defn("pub"), PRIVATE, defn("priv"))
        assert _displays(root) == ["Foo#pub"]

    def test_def_before_private_still_public(self):
        root = cls("Foo", defn("a"), defn("b"), PRIVATE)
        assert _displays(root) == ["Foo#a", "Foo#b"]

    def test_private_with_arguments_does_not_flip(self):
        root = cls("Foo", call("private", sym("helper")), defn("helper"), defn("other"))
        assert _displays(root) == ["Foo#helper", "Foo#other"]

    def test_inline_private_def_does_not_flip(self):
        root = cls("Foo", call("private", defn("hidden")), defn("shown"))
        assert _displays(root) == ["Foo#shown"]

    def test_other_calls_ignored(self):
        root = cls("Foo", call("attr_reader", sym("name")), call("protected"), defn("bar"))
        assert _displays(root) == ["Foo#bar"]

    def test_unknown_statements_ignored(self):
        root = cls("Foo", other(), sym("flag"), seq(defn("inner")), defn("bar"))
        assert _displays(root) == ["Foo#bar"]

    def test_redefinition_keeps_one_entry(self):
        root = cls("Foo", defn("bar", line=2), defn("bar", line=5))
        entries = extract_public_methods(root)
        assert [e.source_line for e in entries] == [5]


# ===========================================================================
# Scope boundaries
# ===========================================================================


class TestNestedScopes:
    def test_nested_names(self):
        root = mod("Foo", cls("Bar", defn("conan")), defn("some_method"))
        assert _displays(root) == ["Foo#some_method", "Foo::Bar#conan"]

    def test_private_in_nested_class_does_not_leak_out(self):
        root = mod("Foo", cls("Bar", PRIVATE, defn("x")), defn("y"))
        assert _displays(root) == ["Foo#y"]

    def test_private_in_outer_does_not_leak_in(self):
        root = mod("Foo", PRIVATE, defn("hidden"), cls("Bar", defn("x")))
        assert _displays(root) == ["Foo::Bar#x"]

    def test_sibling_scopes_do_not_share_path(self):
        root = mod("A", cls("B", defn("b")), cls("C", defn("c")))
        assert _displays(root) == ["A::B#b", "A::C#c"]

    def test_compound_class_name(self):
        root = mod("Outer", cls("Inner::Deep", defn("run")))
        assert _displays(root) == ["Outer::Inner::Deep#run"]

    def test_scope_with_parent_path(self):
        registry = public_methods_for_scope(cls("Bar", defn("x")), ("Foo",))
        assert [e.display for e in registry.values()] == ["Foo::Bar#x"]


# ===========================================================================
# Class-level methods
# ===========================================================================


class TestClassMethods:
    def test_self_def(self):
        entries = extract_public_methods(cls("Fizz", defs("noop")))
        assert [(e.display, e.is_instance_method) for e in entries] == [("Fizz.noop", False)]

    def test_self_def_ignores_private(self):
        root = cls("Fizz", PRIVATE, defs("noop"), defn("hidden"))
        assert _displays(root) == ["Fizz.noop"]

    def test_private_class_method_retracts(self):
        root = cls("Fizz", defs("noop"), call("private_class_method", sym("noop")))
        assert extract_public_methods(root) == []

    def test_private_class_method_without_definition_is_noop(self):
        root = cls("Fizz", call("private_class_method", sym("ghost")), defn("bar"))
        assert _displays(root) == ["Fizz#bar"]

    def test_private_class_method_before_definition_does_not_apply(self):
        root = cls("Fizz", call("private_class_method", sym("noop")), defs("noop"))
        assert _displays(root) == ["Fizz.noop"]

    def test_private_class_method_leaves_instance_method(self):
        root = cls("Fizz", defn("noop"), defs("noop"), call("private_class_method", sym("noop")))
        assert _displays(root) == ["Fizz#noop"]

    def test_private_class_method_needs_symbol(self):
        root = cls("Fizz", defs("noop"), call("private_class_method", other()))
        assert _displays(root) == ["Fizz.noop"]

    def test_private_class_method_after_private(self):
        root = cls("Fizz", defs("a"), defs("b"), PRIVATE, call("private_class_method", sym("a")))
        assert _displays(root) == ["Fizz.b"]


# ===========================================================================
# class << self
# ===========================================================================


class TestSingletonBlock:
    def test_def_inside_block_is_class_method(self):
        entries = extract_public_methods(cls("Foo", sclass(defn("create"))))
        assert [(e.display, e.is_instance_method) for e in entries] == [("Foo.create", False)]

    def test_private_inside_block(self):
        root = cls("Buzz", sclass(defn("pub"), PRIVATE, defn("priv")))
        assert _displays(root) == ["Buzz.pub"]

    def test_outer_private_does_not_reach_block(self):
        root = cls("Buzz", PRIVATE, sclass(defn("pub"), PRIVATE, defn("priv")))
        assert _displays(root) == ["Buzz.pub"]

    def test_block_private_does_not_leak_out(self):
        root = cls("Buzz", sclass(PRIVATE, defn("priv")), defn("after"))
        assert _displays(root) == ["Buzz#after"]

    def test_block_uses_enclosing_scope_name(self):
        root = mod("A", cls("B", sclass(defn("build"))))
        assert _displays(root) == ["A::B.build"]

    def test_self_def_and_nested_block_inside_block_unsupported(self):
        root = cls("Foo", sclass(defs("odd"), sclass(defn("deeper")), defn("ok")))
        assert _displays(root) == ["Foo.ok"]

    def test_retraction_sees_block_methods(self):
        root = cls("Foo", sclass(defn("make")), call("private_class_method", sym("make")))
        assert extract_public_methods(root) == []

    def test_singleton_block_methods_direct(self):
        registry = singleton_block_methods(sclass(defn("a"), defn("b")), "X::Y")
        assert sorted(e.display for e in registry.values()) == ["X::Y.a", "X::Y.b"]

    def test_empty_block(self):
        assert extract_public_methods(cls("Foo", sclass())) == []


# ===========================================================================
# Roots
# ===========================================================================


class TestRoots:
    def test_sequence_root_collects_classes(self):
        root = seq(call("require", other()), cls("A", defn("a")), mod("B", defn("b")))
        assert _displays(root) == ["A#a", "B#b"]

    def test_sequence_without_class_is_empty(self):
        root = seq(defn("i_m_a_method"), other(defn("inside_block")))
        assert extract_public_methods(root) == []

    def test_empty_sequence(self):
        assert extract_public_methods(seq()) == []

    def test_empty_class(self):
        assert extract_public_methods(cls("Foo")) == []

    @pytest.mark.parametrize(
        "kind",
        [NodeKind.METHOD_DEF, NodeKind.CALL, NodeKind.OTHER, NodeKind.SINGLETON_CLASS_BLOCK],
    )
    def test_invalid_root(self, kind):
        with pytest.raises(InvalidRootKind) as excinfo:
            extract_public_methods(TreeNode(kind, (), "x", 7))
        assert excinfo.value.kind is kind
        assert excinfo.value.source_line == 7
        assert "line 7" in str(excinfo.value)

    def test_invalid_root_is_value_error(self):
        with pytest.raises(ValueError):
            extract_public_methods(TreeNode(NodeKind.SYMBOL))

    def test_extraction_is_repeatable(self):
        root = mod("Foo", cls("Bar", PRIVATE, defn("x")), defn("y"), sclass(defn("z")))
        first = extract_public_methods(root)
        second = extract_public_methods(root)
        assert set(first) == set(second)
        assert len(first) == 2
