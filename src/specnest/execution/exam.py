"""
Assertion capability for specnest expectations.

`evaluate` is the single seam between examples and matchers. It judges one
expectation source against a matcher and reports the verdict as an
`AssertionResult` instead of raising, so callers decide what a failure
means. Value sources are computed before the call; block sources are
computed inside it, so an exception raised while producing the value comes
back as the result's `fault`.
"""

from typing import Any, Callable

from attrs import frozen
from pydantic import BaseModel, ConfigDict

from specnest.exceptions import SpecNestError, describe_fault
from specnest.matchers import MatcherLike


@frozen
class ValueSource:
    """An already computed expectation target."""

    value: Any


@frozen
class BlockSource:
    """An expectation target produced by calling `block` during evaluation."""

    block: Callable[[], Any]


Source = ValueSource | BlockSource


def matcher_description(matcher: Any) -> str:
    """Human readable matcher description, falling back to its repr."""
    description = getattr(matcher, "description", None)
    return description if isinstance(description, str) else repr(matcher)


class AssertionResult(BaseModel):
    """Verdict of one expectation: validity, the observed value and any fault."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    valid: bool
    actual: Any = None
    fault: BaseException | None = None
    negate: bool = False
    matcher: Any = None

    @property
    def summary(self) -> str:
        """What was expected, phrased the same way for successes and failures."""
        verb = "not to" if self.negate else "to"
        return f"expected {self.actual!r} {verb} {matcher_description(self.matcher)}"

    @property
    def message(self) -> str:
        """Diagnostic text: fault description, matcher failure text, or the summary."""
        if self.fault is not None:
            return describe_fault(self.fault)
        if self.valid:
            return self.summary

        hook = "failure_message_when_negated" if self.negate else "failure_message"
        formatter = getattr(self.matcher, hook, None)
        if callable(formatter):
            return formatter(self.actual)
        return self.summary


def evaluate(source: Source, negate: bool, matcher: MatcherLike) -> AssertionResult:
    """
    Judge an expectation source against a matcher.

    Params:
        source: ValueSource with a computed value, or BlockSource to call now
        negate: True for `not_to` expectations
        matcher: Object exposing `matches(actual) -> bool`; when its
            `expects_callable` attribute is true, a block source's callable is
            passed unevaluated

    Returns:
        AssertionResult; `fault` is set when producing or matching the value
        raised

    Raises:
        SpecNestError: specnest's own errors (authoring errors, nested
            expectation failures) are never converted into faults
    """
    actual = None
    try:
        if isinstance(source, BlockSource):
            if getattr(matcher, "expects_callable", False):
                matched = matcher.matches(source.block)
                actual = getattr(matcher, "actual", None)
            else:
                actual = source.block()
                matched = matcher.matches(actual)
        else:
            actual = source.value
            matched = matcher.matches(actual)
    except SpecNestError:
        raise
    except Exception as error:
        return AssertionResult(
            valid=False, actual=actual, fault=error, negate=negate, matcher=matcher
        )

    return AssertionResult(
        valid=bool(matched) is not negate,
        actual=actual,
        negate=negate,
        matcher=matcher,
    )


Evaluator = Callable[[Source, bool, MatcherLike], AssertionResult]
