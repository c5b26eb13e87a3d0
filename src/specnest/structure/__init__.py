"""
Declaration components for specnest.

This package provides the builder handed to declaration blocks and the
function that turns a root block into a sealed group tree.
"""

from specnest.structure.builder import (
    DEFAULT_PENDING_MESSAGE,
    GroupBuilder,
    build_group,
)
from specnest.structure.utils import (
    RESERVED_HELPER_NAMES,
    call_with_arity,
    validate_helper_name,
)

__all__ = [
    "GroupBuilder",
    "build_group",
    "DEFAULT_PENDING_MESSAGE",
    "RESERVED_HELPER_NAMES",
    "call_with_arity",
    "validate_helper_name",
]
