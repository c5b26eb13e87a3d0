"""
Declaration builder for specnest example groups.

This module contains `GroupBuilder`, the explicit object handed to every
declaration block, and `build_group`, which materializes a root group from
a block. Blocks only ever call methods on the builder they receive; a
group's block runs exactly once, and the group is sealed when it returns.
"""

import logging
from typing import Any, Callable

from specnest.core.group_node import DescribedTarget, GroupNode
from specnest.core.types import SUBJECT, Description, ExampleBody, Producer
from specnest.structure.utils import call_with_arity, validate_helper_name

logger = logging.getLogger(__name__)

DEFAULT_PENDING_MESSAGE = "Not yet implemented"

DeclarationBlock = Callable[["GroupBuilder"], Any] | Callable[[], Any]


class GroupBuilder:
    """Declaration surface bound to one open `GroupNode`.

    Responsibilities:
    - Append nested groups (`group`, `describe`, `context`) and run their blocks
    - Store helper and subject definitions for this group's level
    - Append runnable and pending examples in declaration order

    `describe` and `context` are the same operation; both create a separate
    child node so sibling groups never share declarations.
    """

    def __init__(self, node: GroupNode):
        self._node = node

    @property
    def node(self) -> GroupNode:
        return self._node

    def group(self, description: Description, block: DeclarationBlock | None = None):
        """Declare a nested group and evaluate `block` against its builder.

        Params:
            description: Text or described value for the nested group.
            block: Callable receiving the nested group's builder. When omitted,
                a decorator is returned that declares the group with the
                decorated function as its block.

        Returns:
            None, or a decorator when `block` is omitted.
        """
        if block is None:

            def decorator(func: DeclarationBlock) -> DeclarationBlock:
                self.group(description, func)
                return func

            return decorator

        child = self._node.add_child(description)
        _populate(child, block)
        return None

    describe = group
    context = group

    def helper(self, name: str, producer: Producer | None = None):
        """Define a memoized helper at this group's level.

        The producer is called with up to two positional arguments: the
        example scope and a function invoking the next outer definition of
        the same name.

        Params:
            name: Helper name; becomes an attribute on the example scope.
            producer: Callable computing the value. When omitted, a decorator
                is returned.

        Raises:
            InvalidHelperNameError: If the name is unusable as a helper name.
        """
        validate_helper_name(name)
        if producer is None:

            def decorator(func: Producer) -> Producer:
                self._define(name, func)
                return func

            return decorator

        self._define(name, producer)
        return None

    let = helper

    def _define(self, name: str, producer: Producer) -> None:
        self._node.define_helper(name, producer)
        logger.debug("Defined helper '%s' at level %d", name, self._node.depth)

    def subject(self, producer: Producer | None = None):
        """Define the `subject` helper at this group's level."""
        return self.helper(SUBJECT, producer)

    def example(
        self, description: str | ExampleBody | None = None, body: ExampleBody | None = None
    ):
        """Declare an example. Without a body it is pending.

        A callable passed as the only argument is taken as an anonymous body.
        """
        if body is None and callable(description):
            description, body = None, description

        pending_message = None
        if body is None:
            pending_message = description or DEFAULT_PENDING_MESSAGE
        self._node.add_example(description, body, pending_message)

    it = example

    def pending_example(self, message: str) -> None:
        """Declare a pending example; it never has a body to run."""
        self._node.add_example(message, None, message)

    pending = pending_example


def _populate(node: GroupNode, block: DeclarationBlock) -> None:
    """Run a declaration block against `node` and seal it afterwards."""
    try:
        call_with_arity(block, GroupBuilder(node))
    finally:
        node.seal()
    logger.debug(
        "Declared group '%s' with %d entries", node.full_description, len(node.entries)
    )


def build_group(description: Description, block: DeclarationBlock | None = None) -> GroupNode:
    """Materialize a root group from its declaration block.

    A non-string description registers the described target that supplies
    the implicit subject for the whole tree.

    Params:
        description: Text or described value (usually a class).
        block: Declaration block receiving the root builder; None declares an
            empty group.

    Returns:
        The sealed root `GroupNode`.
    """
    target = None
    if description is not None and not isinstance(description, str):
        target = DescribedTarget(description)

    root = GroupNode(description=description, described_target=target)
    if block is None:
        root.seal()
    else:
        _populate(root, block)
    return root
