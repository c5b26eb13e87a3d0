"""
specnest execution components.

This package provides helper resolution, expectation evaluation and
single-example execution.
"""

from specnest.execution.exam import (
    AssertionResult,
    BlockSource,
    Evaluator,
    ValueSource,
    evaluate,
)
from specnest.execution.expectation import ExpectationTarget
from specnest.execution.runner import ExampleRunner, ExecutionOutcome
from specnest.execution.scope import ExampleScope, ScopeResolver

__all__ = [
    "AssertionResult",
    "BlockSource",
    "ValueSource",
    "Evaluator",
    "evaluate",
    "ExpectationTarget",
    "ExampleRunner",
    "ExecutionOutcome",
    "ExampleScope",
    "ScopeResolver",
]
