"""
Declaration tree records for specnest.

This module contains the static structure built while example groups are
declared: `GroupNode` for describe/context groups, `ExampleNode` for single
examples, `HelperDefinition` for one level of a named helper, and
`DescribedTarget` for the value a root group describes.

Nodes are mutable only while their declaring block runs. Once a group is
sealed every mutating call raises `GroupSealedError`, so a tree handed to
the driver can be inspected freely.
"""

import inspect
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from attrs import frozen

from specnest.core.types import SUBJECT, Description, ExampleBody, Producer
from specnest.exceptions import GroupSealedError

# Display name of an example with no description outside any named group
ANONYMOUS_EXAMPLE = "anonymous example"


def describe_text(description: Description | None) -> str:
    """Render a group or example description as display text.

    Params:
        description: Text, a described type, or any other described value

    Returns:
        The text itself, the type's qualified name, or the value's `__name__`
        falling back to `repr`
    """
    if description is None:
        return ""
    if isinstance(description, str):
        return description
    if isinstance(description, type):
        return description.__qualname__
    name = getattr(description, "__name__", None)
    return name if isinstance(name, str) else repr(description)


@frozen
class HelperDefinition:
    """One level of a named helper's override chain."""

    name: str
    level: int
    producer: Producer
    group_path: str = ""

    def source_location(self) -> tuple[str | None, int | None]:
        """Locate the producer's Python source, if it has any."""
        try:
            source_file = inspect.getsourcefile(self.producer)
            _, line = inspect.getsourcelines(self.producer)
        except (OSError, TypeError):
            return None, None
        return source_file, line


@frozen
class DescribedTarget:
    """The value a root group describes, usually a class.

    Provides the implicit subject when no group in the chain declares one:
    a fresh no-argument instance when the target is a constructible class,
    otherwise the target value itself.
    """

    value: Any

    @property
    def is_constructible(self) -> bool:
        """Check whether the target is a concrete class callable without arguments."""
        if not isinstance(self.value, type) or inspect.isabstract(self.value):
            return False
        try:
            signature = inspect.signature(self.value)
        except (TypeError, ValueError):
            # Builtins without introspectable signatures (int, dict, ...) take no required args
            return True
        return all(
            param.default is not inspect.Parameter.empty
            or param.kind
            in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
            for param in signature.parameters.values()
        )

    def default_subject(self) -> Any:
        """Produce the implicit subject for this target."""
        if self.is_constructible:
            return self.value()
        return self.value

    @property
    def name(self) -> str:
        return describe_text(self.value)


@dataclass(eq=False, frozen=True)
class ExampleNode:
    """A single runnable example, or a pending placeholder when `body` is None."""

    description: str | None
    group: "GroupNode" = field(repr=False)
    body: ExampleBody | None = field(default=None, repr=False)
    pending_message: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.body is None

    @property
    def display_name(self) -> str:
        """Description used when reporting, falling back to the group path."""
        return self.description or self.group.full_description or ANONYMOUS_EXAMPLE


GroupEntry = Union["GroupNode", ExampleNode]


@dataclass(eq=False)
class GroupNode:
    """Node in the declaration tree representing one describe/context group."""

    description: Description
    parent: Optional["GroupNode"] = field(default=None, repr=False)
    described_target: DescribedTarget | None = None
    sealed: bool = False
    _entries: list[GroupEntry] = field(default_factory=list, repr=False)
    _helpers: dict[str, HelperDefinition] = field(default_factory=dict, repr=False)

    @property
    def entries(self) -> tuple[GroupEntry, ...]:
        """Children and examples in declaration order."""
        return tuple(self._entries)

    @property
    def children(self) -> tuple["GroupNode", ...]:
        return tuple(e for e in self._entries if isinstance(e, GroupNode))

    @property
    def examples(self) -> tuple[ExampleNode, ...]:
        return tuple(e for e in self._entries if isinstance(e, ExampleNode))

    @property
    def helpers(self) -> Mapping[str, HelperDefinition]:
        """This node's own helper definitions (ancestors' are not included)."""
        return MappingProxyType(self._helpers)

    @property
    def subject_definition(self) -> HelperDefinition | None:
        return self._helpers.get(SUBJECT)

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    @property
    def root(self) -> "GroupNode":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def target(self) -> DescribedTarget | None:
        """The described target inherited from the root group."""
        return self.root.described_target

    @property
    def text(self) -> str:
        return describe_text(self.description)

    @property
    def full_description(self) -> str:
        """Descriptions from the root down to this group, joined by spaces."""
        return " ".join(node.text for node in self.ancestors() if node.text)

    def ancestors(self) -> list["GroupNode"]:
        """Ancestor chain ordered root first, ending with this node."""
        chain = []
        node: GroupNode | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def walk(self) -> Iterator[ExampleNode]:
        """Yield examples depth-first, children in their declared position."""
        for entry in self._entries:
            if isinstance(entry, GroupNode):
                yield from entry.walk()
            else:
                yield entry

    def add_child(self, description: Description) -> "GroupNode":
        """Append a child group and return it, still open for declarations."""
        self._ensure_open()
        child = GroupNode(description=description, parent=self)
        self._entries.append(child)
        return child

    def add_example(
        self,
        description: str | None = None,
        body: ExampleBody | None = None,
        pending_message: str | None = None,
    ) -> ExampleNode:
        """Append an example; an absent body makes it pending."""
        self._ensure_open()
        example = ExampleNode(
            description=description,
            group=self,
            body=body,
            pending_message=pending_message,
        )
        self._entries.append(example)
        return example

    def define_helper(self, name: str, producer: Producer) -> HelperDefinition:
        """Store this node's definition of `name`, replacing only its own previous one."""
        self._ensure_open()
        definition = HelperDefinition(
            name=name,
            level=self.depth,
            producer=producer,
            group_path=self.full_description,
        )
        self._helpers[name] = definition
        return definition

    def seal(self) -> None:
        """Close this node for declarations; called when its block returns."""
        self.sealed = True

    def _ensure_open(self) -> None:
        if self.sealed:
            raise GroupSealedError(self.full_description)
