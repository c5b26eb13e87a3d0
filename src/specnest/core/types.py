"""
Core type definitions for specnest.

This module contains the type aliases and enumerations shared by the
declaration tree, the scope resolver and the runner.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from specnest.execution.scope import ExampleScope


class OutcomeTag(Enum):
    """Classification of one executed (or skipped-as-pending) example."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    PENDING = "pending"

    @property
    def halts(self) -> bool:
        """Whether this outcome stops the run."""
        return self in (OutcomeTag.FAILED, OutcomeTag.ERRORED)


# Invokes the next outer definition of the helper being produced
OuterCall = Callable[[], Any]

# Producers accept up to (scope, outer); fewer positional params are allowed
Producer = Callable[..., Any]

ExampleBody = Callable[["ExampleScope"], Any] | Callable[[], Any]

Description = str | type | object

SUBJECT = "subject"
