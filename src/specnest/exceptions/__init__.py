"""
specnest exception classes.

This package provides all exception types used throughout specnest for
consistent error handling and reporting.
"""

from specnest.exceptions.core import (
    AuthoringError,
    CircularHelperError,
    ErrorContext,
    ErrorLevel,
    ExpectationFailure,
    Fault,
    GroupSealedError,
    InvalidHelperNameError,
    OverrideWithoutAncestorError,
    SpecNestError,
    UndefinedDescribedTargetError,
    UndefinedHelperError,
    describe_fault,
)

__all__ = [
    "SpecNestError",
    "ErrorContext",
    "ErrorLevel",
    "ExpectationFailure",
    "Fault",
    "AuthoringError",
    "UndefinedDescribedTargetError",
    "OverrideWithoutAncestorError",
    "UndefinedHelperError",
    "CircularHelperError",
    "InvalidHelperNameError",
    "GroupSealedError",
    "describe_fault",
]
