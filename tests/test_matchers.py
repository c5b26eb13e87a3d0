"""
Tests for the built-in matchers.
"""

import re

import pytest

from specnest.matchers import (
    Matcher,
    MatcherLike,
    be,
    be_false,
    be_instance_of,
    be_none,
    be_true,
    be_within,
    eq,
    include,
    match,
    raise_exception,
    satisfy,
)


class TestMatches:
    @pytest.mark.parametrize(
        "matcher,actual,expected",
        [
            (eq(3), 3, True),
            (eq([1]), [1], True),
            (eq(3), 4, False),
            (be(None), None, True),
            (be([]), [], False),
            (be_true(), True, True),
            (be_true(), 1, False),
            (be_false(), False, True),
            (be_none(), 0, False),
            (be_instance_of(int), 3, True),
            (be_instance_of((str, bytes)), b"x", True),
            (be_instance_of(int), "3", False),
            (be_within(0.01).of(3.14), 3.141, True),
            (be_within(0.01).of(3.14), 3.2, False),
            (include(1, 2), [1, 2, 3], True),
            (include("z"), "abc", False),
            (match(r"^foo"), "foobar", True),
            (match(re.compile("bar$")), "foobar", True),
            (match("foo"), 42, False),
            (satisfy(lambda n: n > 0), 1, True),
            (satisfy(lambda n: n > 0), -1, False),
        ],
    )
    def test_matches(self, matcher, actual, expected):
        assert matcher.matches(actual) is expected

    def test_be_within_requires_expected(self):
        with pytest.raises(ValueError):
            be_within(0.1).matches(1.0)


class TestDescriptions:
    def test_failure_messages(self):
        matcher = eq(42)

        assert matcher.description == "eq 42"
        assert matcher.failure_message(41) == "expected 41 to eq 42"
        assert matcher.failure_message_when_negated(42) == "expected 42 not to eq 42"

    def test_satisfy_description(self):
        assert satisfy(bool, "truthiness").description == "satisfy truthiness"
        assert satisfy(bool).description == "satisfy the given predicate"

    def test_builtins_fit_protocol(self):
        assert isinstance(eq(1), MatcherLike)
        assert isinstance(eq(1), Matcher)


class TestRaiseException:
    def test_expected_exception_matches(self):
        matcher = raise_exception(ZeroDivisionError)

        assert matcher.matches(lambda: 1 / 0)
        assert isinstance(matcher.actual, ZeroDivisionError)

    def test_no_exception_does_not_match(self):
        matcher = raise_exception(ZeroDivisionError)

        assert not matcher.matches(lambda: 1)
        assert matcher.failure_message(None).endswith("nothing was raised")

    def test_message_must_match_when_given(self):
        def fail():
            raise ValueError("wrong")

        assert raise_exception(ValueError, "wrong").matches(fail)
        assert not raise_exception(ValueError, "other").matches(fail)

    def test_other_exceptions_propagate(self):
        with pytest.raises(KeyError):
            raise_exception(ValueError).matches(lambda: {}["x"])

    def test_requires_callable(self):
        with pytest.raises(TypeError):
            raise_exception(ValueError).matches(42)

    def test_expects_callable_flag(self):
        assert raise_exception().expects_callable
        assert not eq(1).expects_callable
