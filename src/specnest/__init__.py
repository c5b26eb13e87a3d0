"""
specnest - nested example groups with memoized helpers

specnest provides a DSL for declaring describe/context groups, per-example
memoized helpers with explicit override chaining, and examples whose
expectations are judged by matchers.
"""

from importlib.metadata import version

from specnest.core.group_node import ExampleNode, GroupNode
from specnest.dsl import context, describe, it, pending
from specnest.execution.runner import ExampleRunner, ExecutionOutcome
from specnest.execution.scope import ExampleScope
from specnest.reporting.driver import Driver, RunResult, run_or_exit
from specnest.structure.builder import GroupBuilder, build_group

__version__ = version("specnest")

__all__ = [
    "__version__",
    "describe",
    "context",
    "it",
    "pending",
    "build_group",
    "GroupBuilder",
    "GroupNode",
    "ExampleNode",
    "ExampleScope",
    "ExampleRunner",
    "ExecutionOutcome",
    "Driver",
    "RunResult",
    "run_or_exit",
]
