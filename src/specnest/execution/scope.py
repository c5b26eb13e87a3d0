"""
Per-example helper resolution for specnest.

This module contains the two halves of an example's runtime scope:

- `ScopeResolver` walks the example's ancestor chain, assembles the
  root-to-leaf override chain for a helper name, runs the innermost
  definition with an explicit "next outer" function, and memoizes the
  final value in exactly one slot per name.
- `ExampleScope` is the object example bodies and helper producers receive.
  It exposes helpers as attributes and items and provides the expectation
  entry points.

A new `ExampleScope` (and resolver) is created for every example run, so no
memoized value is ever visible to another example.
"""

import logging
from typing import Any, Callable

from specnest.core.group_node import ExampleNode, GroupNode, HelperDefinition
from specnest.core.types import SUBJECT
from specnest.exceptions import (
    CircularHelperError,
    ErrorContext,
    OverrideWithoutAncestorError,
    UndefinedDescribedTargetError,
    UndefinedHelperError,
)
from specnest.execution.exam import AssertionResult, Evaluator, evaluate
from specnest.execution.expectation import ExpectationTarget
from specnest.structure.utils import call_with_arity

logger = logging.getLogger(__name__)

# Level assigned to the implicit subject derived from the described target
DEFAULT_SUBJECT_LEVEL = -1


class ScopeResolver:
    """Resolves helpers for one example run against its ancestor chain.

    Responsibilities:
    - Collect every ancestor definition of a name, root first
    - Add the described target's default subject as the outermost link of
      the `subject` chain
    - Invoke the innermost definition, chaining outward on request
    - Memoize one value per name and detect self-dependent helpers
    """

    def __init__(self, group: GroupNode, example_description: str | None = None):
        self._group = group
        self._chain = group.ancestors()
        self._example_description = example_description
        self._memo: dict[str, Any] = {}
        self._resolving: list[str] = []

    @property
    def chain(self) -> tuple[GroupNode, ...]:
        """Ancestor groups, root first, ending with the example's own group."""
        return tuple(self._chain)

    @property
    def cache(self) -> dict[str, Any]:
        """Snapshot of memoized helper values."""
        return dict(self._memo)

    def is_cached(self, name: str) -> bool:
        return name in self._memo

    def definitions_for(self, name: str) -> list[HelperDefinition]:
        """
        Build the override chain of `name` for this example.

        Params:
            name: Helper name to look up

        Returns:
            Definitions ordered root to leaf. For `subject`, the default
            derived from the described target leads the list when one is
            registered.
        """
        definitions = [
            node.helpers[name] for node in self._chain if name in node.helpers
        ]

        if name == SUBJECT:
            target = self._group.target
            if target is not None:
                default = HelperDefinition(
                    name=SUBJECT,
                    level=DEFAULT_SUBJECT_LEVEL,
                    producer=target.default_subject,
                    group_path=self._chain[0].full_description,
                )
                definitions.insert(0, default)

        return definitions

    def resolve(self, name: str, scope: "ExampleScope") -> Any:
        """
        Resolve a helper value, computing it on first use.

        Params:
            name: Helper name
            scope: Scope handed to producers as their first argument

        Returns:
            The memoized value for `name` in this example

        Raises:
            UndefinedDescribedTargetError: `subject` requested with neither a
                subject definition nor a described target
            UndefinedHelperError: No ancestor declares `name`
            CircularHelperError: `name` is required while it is being computed
            OverrideWithoutAncestorError: A definition called its outer
                definition and none exists
        """
        if name in self._memo:
            return self._memo[name]

        if name in self._resolving:
            start = self._resolving.index(name)
            raise CircularHelperError(
                self._resolving[start:] + [name], self._error_context(name)
            )

        definitions = self.definitions_for(name)
        if not definitions:
            if name == SUBJECT:
                raise UndefinedDescribedTargetError(self._error_context(name))
            raise UndefinedHelperError(name, self._error_context(name))

        self._resolving.append(name)
        try:
            value = self._invoke(definitions, len(definitions) - 1, scope)
        finally:
            self._resolving.pop()

        self._memo[name] = value
        logger.debug(
            "Resolved helper '%s' through %d definition(s)", name, len(definitions)
        )
        return value

    def _invoke(
        self, definitions: list[HelperDefinition], index: int, scope: "ExampleScope"
    ) -> Any:
        """Run the definition at `index`, giving it access to the one before it."""
        definition = definitions[index]

        def outer() -> Any:
            if index == 0:
                raise OverrideWithoutAncestorError(
                    definition.name, self._error_context(definition.name, definition)
                )
            return self._invoke(definitions, index - 1, scope)

        return call_with_arity(definition.producer, scope, outer)

    def _error_context(
        self, name: str, definition: HelperDefinition | None = None
    ) -> ErrorContext:
        source_file, source_line = (
            definition.source_location() if definition else (None, None)
        )
        return ErrorContext(
            group_path=self._group.full_description or None,
            helper_name=name,
            example_description=self._example_description,
            source_file=source_file,
            source_line=source_line,
        )


class ExampleScope:
    """Runtime scope of one example execution.

    Helpers resolve through attribute access (`scope.answer`), item access
    (`scope["answer"]`) or `scope.resolve("answer")`; all three share the
    same memo slot. `scope.subject` is an ordinary helper lookup.
    """

    def __init__(self, example: ExampleNode, evaluator: Evaluator = evaluate):
        self._example = example
        self._evaluator = evaluator
        self._resolver = ScopeResolver(example.group, example.description)
        self._successes: list[AssertionResult] = []

    @property
    def example(self) -> ExampleNode:
        return self._example

    @property
    def resolver(self) -> ScopeResolver:
        return self._resolver

    @property
    def successes(self) -> tuple[AssertionResult, ...]:
        """Expectations that passed so far, in order."""
        return tuple(self._successes)

    @property
    def described_target(self) -> Any:
        """The value the root group describes."""
        target = self._example.group.target
        if target is None:
            raise UndefinedDescribedTargetError(
                ErrorContext(
                    group_path=self._example.group.full_description or None,
                    example_description=self._example.description,
                )
            )
        return target.value

    def resolve(self, name: str) -> Any:
        return self._resolver.resolve(name, self)

    def __getitem__(self, name: str) -> Any:
        return self.resolve(name)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real attributes
        if name.startswith("_"):
            raise AttributeError(name)
        return self.resolve(name)

    def expect(self, value: Any) -> ExpectationTarget:
        """Start an expectation about an already computed value."""
        return ExpectationTarget.for_value(value, self._evaluator, self._successes.append)

    def expect_deferred(self, block: Callable[[], Any]) -> ExpectationTarget:
        """Start an expectation about the value `block` produces when evaluated."""
        return ExpectationTarget.for_block(block, self._evaluator, self._successes.append)

    def is_expected(self) -> ExpectationTarget:
        """Start a deferred expectation about `subject`.

        The subject is resolved inside the expectation, so an error raised
        while producing it can be matched with `raise_exception`.
        """
        return self.expect_deferred(lambda: self.resolve(SUBJECT))
