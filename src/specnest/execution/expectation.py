"""
Expectation targets returned by `expect`, `expect_deferred` and `is_expected`.
"""

from typing import Any, Callable

from specnest.exceptions import ExpectationFailure, Fault
from specnest.execution.exam import (
    AssertionResult,
    BlockSource,
    Evaluator,
    Source,
    ValueSource,
)
from specnest.matchers import MatcherLike


class ExpectationTarget:
    """Wraps the target of an expectation until a matcher is applied.

    `to` and `not_to` delegate to the evaluator. A valid result is handed to
    `on_success` and returned; an invalid one raises `ExpectationFailure` and
    a faulted one raises `Fault`, both of which end the example body.
    """

    def __init__(
        self,
        source: Source,
        evaluator: Evaluator,
        on_success: Callable[[AssertionResult], None] | None = None,
    ):
        self._source = source
        self._evaluator = evaluator
        self._on_success = on_success

    @classmethod
    def for_value(cls, value: Any, evaluator: Evaluator, on_success=None) -> "ExpectationTarget":
        return cls(ValueSource(value), evaluator, on_success)

    @classmethod
    def for_block(
        cls, block: Callable[[], Any], evaluator: Evaluator, on_success=None
    ) -> "ExpectationTarget":
        return cls(BlockSource(block), evaluator, on_success)

    @property
    def deferred(self) -> bool:
        return isinstance(self._source, BlockSource)

    def to(self, matcher: MatcherLike) -> AssertionResult:
        """Require the target to satisfy `matcher`."""
        return self._require(matcher, negate=False)

    def not_to(self, matcher: MatcherLike) -> AssertionResult:
        """Require the target not to satisfy `matcher`."""
        return self._require(matcher, negate=True)

    to_not = not_to

    def _require(self, matcher: MatcherLike, negate: bool) -> AssertionResult:
        result = self._evaluator(self._source, negate, matcher)
        if result.fault is not None:
            raise Fault(result.fault) from result.fault
        if not result.valid:
            raise ExpectationFailure(result.message, result)
        if self._on_success is not None:
            self._on_success(result)
        return result
