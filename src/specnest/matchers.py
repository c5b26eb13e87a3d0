"""Built-in matchers.

Every matcher exposes `matches(actual) -> bool`, a `description` phrased to
follow "expected <actual> to ...", and the two failure message hooks used
by `AssertionResult.message`. Any object with the same surface works with
`to` / `not_to`; these are only the defaults.

Matchers that need the unevaluated block of `expect_deferred` (such as
`raise_exception`) set `expects_callable = True`.
"""

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol, runtime_checkable

from specnest.exceptions import SpecNestError


@runtime_checkable
class MatcherLike(Protocol):
    """Structural type accepted by expectation targets."""

    description: str

    def matches(self, actual: Any) -> bool: ...


class Matcher(ABC):
    """Base class deriving failure messages from `description`."""

    expects_callable = False

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def matches(self, actual: Any) -> bool:
        pass

    def failure_message(self, actual: Any) -> str:
        return f"expected {actual!r} to {self.description}"

    def failure_message_when_negated(self, actual: Any) -> str:
        return f"expected {actual!r} not to {self.description}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description}>"


class Eq(Matcher):
    """Equality (`==`)."""

    def __init__(self, expected: Any):
        self.expected = expected

    @property
    def description(self) -> str:
        return f"eq {self.expected!r}"

    def matches(self, actual: Any) -> bool:
        return actual == self.expected


class Be(Matcher):
    """Identity (`is`)."""

    def __init__(self, expected: Any):
        self.expected = expected

    @property
    def description(self) -> str:
        return f"be {self.expected!r}"

    def matches(self, actual: Any) -> bool:
        return actual is self.expected


class BeInstanceOf(Matcher):
    def __init__(self, expected: type | tuple[type, ...]):
        self.expected = expected

    @property
    def description(self) -> str:
        if isinstance(self.expected, tuple):
            names = ", ".join(t.__name__ for t in self.expected)
            return f"be an instance of one of ({names})"
        return f"be an instance of {self.expected.__name__}"

    def matches(self, actual: Any) -> bool:
        return isinstance(actual, self.expected)


class BeWithin(Matcher):
    """Numeric closeness: `be_within(0.01).of(3.14)`."""

    def __init__(self, delta: float, expected: float | None = None):
        self.delta = delta
        self.expected = expected

    def of(self, expected: float) -> "BeWithin":
        return BeWithin(self.delta, expected)

    @property
    def description(self) -> str:
        return f"be within {self.delta!r} of {self.expected!r}"

    def matches(self, actual: Any) -> bool:
        if self.expected is None:
            raise ValueError("be_within requires .of(expected)")
        return math.fabs(actual - self.expected) <= self.delta


class Include(Matcher):
    def __init__(self, *items: Any):
        self.items = items

    @property
    def description(self) -> str:
        return "include " + ", ".join(repr(item) for item in self.items)

    def matches(self, actual: Any) -> bool:
        return all(item in actual for item in self.items)


class Match(Matcher):
    """Regular expression search against a string."""

    def __init__(self, pattern: str | re.Pattern):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    @property
    def description(self) -> str:
        return f"match /{self.pattern.pattern}/"

    def matches(self, actual: Any) -> bool:
        return isinstance(actual, str) and self.pattern.search(actual) is not None


class Satisfy(Matcher):
    """Arbitrary predicate."""

    def __init__(self, predicate: Callable[[Any], bool], description: str | None = None):
        self.predicate = predicate
        self._description = description

    @property
    def description(self) -> str:
        if self._description:
            return f"satisfy {self._description}"
        return "satisfy the given predicate"

    def matches(self, actual: Any) -> bool:
        return bool(self.predicate(actual))


class RaiseException(Matcher):
    """Calls the deferred block and checks it raises `expected`.

    Exceptions of other types propagate, so the assertion capability
    reports them as faults. specnest errors raised by the block always
    propagate, even when they are instances of `expected`.
    """

    expects_callable = True

    def __init__(self, expected: type[BaseException] = Exception, message: str | None = None):
        self.expected = expected
        self.message = message
        self.actual: BaseException | None = None

    @property
    def description(self) -> str:
        text = f"raise {self.expected.__name__}"
        if self.message is not None:
            text += f" with message {self.message!r}"
        return text

    def matches(self, actual: Any) -> bool:
        if not callable(actual):
            raise TypeError("raise_exception requires expect_deferred")

        self.actual = None
        try:
            actual()
        except SpecNestError:
            raise
        except self.expected as error:
            self.actual = error
            return self.message is None or str(error) == self.message
        return False

    def failure_message(self, actual: Any) -> str:
        if self.actual is None:
            return f"expected block to {self.description} but nothing was raised"
        return f"expected block to {self.description} but it raised {self.actual!r}"

    def failure_message_when_negated(self, actual: Any) -> str:
        return f"expected block not to {self.description} but it raised {self.actual!r}"


def eq(expected: Any) -> Eq:
    return Eq(expected)


def be(expected: Any) -> Be:
    return Be(expected)


def be_true() -> Be:
    return Be(True)


def be_false() -> Be:
    return Be(False)


def be_none() -> Be:
    return Be(None)


def be_instance_of(expected: type | tuple[type, ...]) -> BeInstanceOf:
    return BeInstanceOf(expected)


def be_within(delta: float) -> BeWithin:
    return BeWithin(delta)


def include(*items: Any) -> Include:
    return Include(*items)


def match(pattern: str | re.Pattern) -> Match:
    return Match(pattern)


def satisfy(predicate: Callable[[Any], bool], description: str | None = None) -> Satisfy:
    return Satisfy(predicate, description)


def raise_exception(
    expected: type[BaseException] = Exception, message: str | None = None
) -> RaiseException:
    return RaiseException(expected, message)
