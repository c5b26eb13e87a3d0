"""
Core specnest components.

This package provides the declaration tree records and the shared type
definitions used by the resolver, runner and reporter.
"""

from specnest.core.group_node import (
    DescribedTarget,
    ExampleNode,
    GroupNode,
    HelperDefinition,
    describe_text,
)
from specnest.core.types import (
    SUBJECT,
    Description,
    ExampleBody,
    OuterCall,
    OutcomeTag,
    Producer,
)

__all__ = [
    "GroupNode",
    "ExampleNode",
    "HelperDefinition",
    "DescribedTarget",
    "describe_text",
    "OutcomeTag",
    "OuterCall",
    "Producer",
    "ExampleBody",
    "Description",
    "SUBJECT",
]
