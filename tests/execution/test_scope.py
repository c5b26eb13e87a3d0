"""
Tests for per-example helper resolution.

This module tests ScopeResolver and ExampleScope:
- Override chains across ancestry levels and explicit outer calls
- One memo slot per helper name per example
- Default subject derived from the described target
- Authoring errors raised during resolution
- Isolation between examples and sibling groups
"""

import pytest

from specnest.exceptions import (
    CircularHelperError,
    OverrideWithoutAncestorError,
    UndefinedDescribedTargetError,
    UndefinedHelperError,
)
from specnest.execution import ExampleScope
from specnest.structure import build_group


def scope_for(root, path=()):
    """Build a scope for the first example under the group reached by child indexes."""
    node = root
    for index in path:
        node = node.children[index]
    return ExampleScope(node.examples[0])


class TestOverrideChain:
    """Test helper inheritance and explicit delegation to outer definitions."""

    def test_child_definition_wins(self):
        def spec(g):
            g.let("answer", lambda: 42)
            g.context("nested", lambda g: (g.let("answer", lambda: 7), g.it("x", lambda: None)))

        scope = scope_for(build_group("root", spec), (0,))

        assert scope.answer == 7

    def test_inherited_definition_is_visible(self):
        def spec(g):
            g.let("answer", lambda: 42)
            g.context("nested", lambda g: g.it("x", lambda: None))

        scope = scope_for(build_group("root", spec), (0,))

        assert scope.answer == 42

    def test_outer_receives_parent_value(self):
        """The child definition delegates to the parent's definition."""

        def spec(g):
            g.let("answer", lambda: 42)

            def incremented(g):
                g.let("answer", lambda s, outer: outer() + 1)
                g.it("x", lambda: None)

            g.context("when incremented", incremented)

        scope = scope_for(build_group(int, spec), (0,))

        assert scope.answer == 43

    def test_outer_chains_through_every_level(self):
        def spec(g):
            g.let("trail", lambda: ["root"])

            def middle(g):
                g.let("trail", lambda s, outer: outer() + ["middle"])

                def leaf(g):
                    g.let("trail", lambda s, outer: outer() + ["leaf"])
                    g.it("x", lambda: None)

                g.context("leaf", leaf)

            g.context("middle", middle)

        scope = scope_for(build_group("root", spec), (0, 0))

        assert scope.trail == ["root", "middle", "leaf"]

    def test_levels_without_definition_are_skipped(self):
        def spec(g):
            g.let("value", lambda: 1)

            def middle(g):
                def leaf(g):
                    g.let("value", lambda s, outer: outer() * 10)
                    g.it("x", lambda: None)

                g.context("leaf", leaf)

            g.context("middle", middle)

        scope = scope_for(build_group("root", spec), (0, 0))

        assert scope.value == 10

    def test_helpers_can_use_other_helpers(self):
        def spec(g):
            g.let("base", lambda: 2)
            g.let("doubled", lambda s: s.base * 2)
            g.it("x", lambda: None)

        scope = scope_for(build_group("root", spec))

        assert scope.doubled == 4

    def test_outer_without_ancestor_raises(self):
        def spec(g):
            g.let("answer", lambda s, outer: outer() + 1)
            g.it("x", lambda: None)

        scope = scope_for(build_group("root", spec))

        with pytest.raises(OverrideWithoutAncestorError) as exc_info:
            scope.answer

        assert exc_info.value.helper_name == "answer"
        assert "answer" in str(exc_info.value)

    def test_access_forms_share_resolution(self):
        def spec(g):
            g.let("answer", lambda: object())
            g.it("x", lambda: None)

        scope = scope_for(build_group("root", spec))

        assert scope.answer is scope["answer"] is scope.resolve("answer")


class TestMemoization:
    """Test one cached value per helper name per example."""

    def test_producer_runs_once_per_example(self):
        calls = []

        def produce():
            calls.append(1)
            return len(calls)

        def spec(g):
            g.let("counter", produce)
            g.let("via_counter", lambda s: s.counter)
            g.it("x", lambda: None)

        scope = scope_for(build_group("root", spec))

        assert scope.counter == 1
        assert scope.counter == 1
        assert scope.via_counter == 1
        assert calls == [1]

    def test_override_chain_fills_a_single_slot(self):
        parent_calls = []

        def parent():
            parent_calls.append(1)
            return [1]

        def spec(g):
            g.let("items", parent)

            def nested(g):
                g.let("items", lambda s, outer: outer() + [2])
                g.it("x", lambda: None)

            g.context("nested", nested)

        scope = scope_for(build_group("root", spec), (0,))

        first = scope.items
        assert scope.items is first
        assert first == [1, 2]
        assert parent_calls == [1]
        assert scope.resolver.cache == {"items": [1, 2]}

    def test_each_scope_starts_empty(self):
        def spec(g):
            g.let("fresh", lambda: object())
            g.it("x", lambda: None)

        root = build_group("root", spec)
        example = root.examples[0]

        assert ExampleScope(example).fresh is not ExampleScope(example).fresh

    def test_sibling_groups_do_not_share_values(self):
        """Sibling groups with the same counter helper each start from the initial state."""

        def spec(g):
            g.let("start", lambda: 0)

            def sibling(g):
                g.let("counter", lambda s: s.start + 1)
                g.it("first", lambda: None)
                g.it("second", lambda: None)

            g.context("left", sibling)
            g.context("right", sibling)

        root = build_group("root", spec)

        values = []
        for example in root.walk():
            scope = ExampleScope(example)
            assert scope.resolver.cache == {}
            values.append(scope.counter)

        assert values == [1, 1, 1, 1]


class TestSubject:
    """Test subject resolution and the described target default."""

    def test_described_sequence_defaults_to_empty(self):
        scope = scope_for(build_group(list, lambda g: g.it("x", lambda: None)))

        assert scope.subject == []

    def test_default_subject_is_memoized(self):
        scope = scope_for(build_group(list, lambda g: g.it("x", lambda: None)))

        scope.subject.append(1)

        assert scope.subject == [1]

    def test_default_subject_is_fresh_per_example(self):
        root = build_group(list, lambda g: (g.it("a", lambda: None), g.it("b", lambda: None)))
        first, second = root.examples

        assert ExampleScope(first).subject is not ExampleScope(second).subject

    def test_explicit_subject_is_inherited_into_contexts(self):
        def spec(g):
            g.subject(lambda: [1, 2, 3])
            g.context("when inside a context", lambda g: g.it("x", lambda: None))

        scope = scope_for(build_group(list, spec), (0,))

        assert scope.subject == [1, 2, 3]

    def test_explicit_subject_can_extend_default(self):
        def spec(g):
            g.subject(lambda s, outer: outer() + ["added"])
            g.it("x", lambda: None)

        scope = scope_for(build_group(list, spec))

        assert scope.subject == ["added"]

    def test_missing_subject_without_target_raises(self):
        scope = scope_for(build_group("plain text", lambda g: g.it("x", lambda: None)))

        with pytest.raises(UndefinedDescribedTargetError):
            scope.subject

    def test_described_target_accessor(self):
        scope = scope_for(build_group(dict, lambda g: g.it("x", lambda: None)))

        assert scope.described_target is dict

    def test_described_target_accessor_without_target_raises(self):
        scope = scope_for(build_group("plain", lambda g: g.it("x", lambda: None)))

        with pytest.raises(UndefinedDescribedTargetError):
            scope.described_target


class TestResolutionErrors:
    """Test authoring errors surfaced by the resolver."""

    def test_undefined_helper(self):
        scope = scope_for(build_group("root", lambda g: g.it("x", lambda: None)))

        with pytest.raises(UndefinedHelperError) as exc_info:
            scope.missing

        assert exc_info.value.helper_name == "missing"
        assert "root" in str(exc_info.value)

    def test_circular_helpers(self):
        def spec(g):
            g.let("a", lambda s: s.b)
            g.let("b", lambda s: s.a)
            g.it("x", lambda: None)

        scope = scope_for(build_group("root", spec))

        with pytest.raises(CircularHelperError) as exc_info:
            scope.a

        assert exc_info.value.cycle == ["a", "b", "a"]

    def test_failed_resolution_leaves_no_cache_entry(self):
        def spec(g):
            g.let("broken", lambda: 1 / 0)
            g.it("x", lambda: None)

        scope = scope_for(build_group("root", spec))

        with pytest.raises(ZeroDivisionError):
            scope.broken

        assert not scope.resolver.is_cached("broken")

    def test_private_attributes_are_not_helpers(self):
        scope = scope_for(build_group("root", lambda g: g.it("x", lambda: None)))

        with pytest.raises(AttributeError):
            scope._missing
