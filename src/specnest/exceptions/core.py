"""
Exception classes for specnest example groups.

This module defines the exception types raised while declaring example
groups, resolving helpers and running examples. Two families exist:

- outcome exceptions (`ExpectationFailure`, `Fault`) that the runner
  captures into an example outcome, and
- authoring errors (`AuthoringError` subclasses) that signal a bug in the
  declarations themselves and propagate to whoever started the run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specnest.execution.exam import AssertionResult


class ErrorLevel(Enum):
    """Error message detail level for spec authors vs library developers."""

    USER = "user"  # Group path and helper name only
    DEVELOPER = "developer"  # Adds Python source locations of producers


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an authoring error surfaced in DSL terms (group path,
    helper name, example description) and in Python source terms (the file
    and line of the offending producer). Supports formatting at different
    detail levels.

    Params:
        group_path: Space-joined descriptions from the root to the group
        helper_name: Helper being resolved when the error surfaced
        example_description: Description of the example being run
        source_file: Python file where the producer was defined
        source_line: Line number of the producer definition
    """

    group_path: str | None = None
    helper_name: str | None = None
    example_description: str | None = None
    source_file: str | None = None
    source_line: int | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string, one indented line per known fact
        """
        lines = []

        if self.group_path:
            lines.append(f"  in group '{self.group_path}'")
        if self.helper_name:
            lines.append(f"  while resolving '{self.helper_name}'")
        if self.example_description:
            lines.append(f"  for example '{self.example_description}'")

        if error_level == ErrorLevel.DEVELOPER:
            if self.source_file and self.source_line:
                lines.append(f"  defined at {self.source_file}:{self.source_line}")

        return "\n".join(lines)


class SpecNestError(Exception):
    """Base exception for all specnest errors."""

    pass


class ExpectationFailure(SpecNestError):
    """Raised inside an example body when a matcher reports the value invalid."""

    def __init__(self, message: str, result: "AssertionResult | None" = None):
        """
        Initialize the exception.

        Params:
            message: The matcher's failure description
            result: The assertion result that was judged invalid
        """
        self.result = result
        super().__init__(message)


class Fault(SpecNestError):
    """Raised when evaluating a target or example body raised unexpectedly."""

    def __init__(self, error: BaseException):
        """
        Initialize the exception.

        Params:
            error: The original exception raised while evaluating
        """
        self.error = error
        super().__init__(describe_fault(error))


class AuthoringError(SpecNestError):
    """Base for errors that reveal a bug in the declarations themselves."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            context: ErrorContext with group and source location information
            error_level: Level of detail to show in error message
        """
        self.context = context
        self.error_level = error_level

        if context:
            location_info = context.format_location(error_level)
            full_message = f"{message}\n{location_info}" if location_info else message
        else:
            full_message = message

        super().__init__(full_message)


class UndefinedDescribedTargetError(AuthoringError):
    """Raised when `subject` is needed but neither a subject nor a described target exists."""

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No subject is defined and the root group does not describe a target",
            context,
        )


class OverrideWithoutAncestorError(AuthoringError):
    """Raised when a helper calls its next outer definition and none exists."""

    def __init__(self, helper_name: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            helper_name: Name of the helper whose outer definition was requested
            context: ErrorContext with group and source location information
        """
        self.helper_name = helper_name
        super().__init__(
            f"Helper '{helper_name}' has no outer definition to delegate to", context
        )


class UndefinedHelperError(AuthoringError):
    """Raised when resolving a helper that no ancestor group declares."""

    def __init__(self, helper_name: str, context: ErrorContext | None = None):
        self.helper_name = helper_name
        super().__init__(f"Helper '{helper_name}' is not defined", context)


class CircularHelperError(AuthoringError):
    """Raised when a helper requires itself while it is being computed."""

    def __init__(self, cycle: list[str], context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            cycle: Helper names in resolution order, ending with the repeated name
            context: ErrorContext with group and source location information
        """
        self.cycle = cycle
        super().__init__(
            f"Circular helper dependency: {' -> '.join(cycle)}", context
        )


class InvalidHelperNameError(AuthoringError):
    """Raised when declaring a helper under an unusable name."""

    def __init__(self, helper_name: str, reason: str):
        self.helper_name = helper_name
        self.reason = reason
        super().__init__(f"Invalid helper name '{helper_name}': {reason}")


class GroupSealedError(AuthoringError):
    """Raised when declaring into a group after its declaring block returned."""

    def __init__(self, group_path: str):
        self.group_path = group_path
        super().__init__(
            f"Group '{group_path}' is sealed; declarations must happen inside its block"
        )


def describe_fault(error: BaseException) -> str:
    """Render an exception as `TypeName: message`, or just the type name."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name
