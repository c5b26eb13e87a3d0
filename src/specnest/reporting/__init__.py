"""
specnest reporting components.

This package provides the console reporter and the driver enacting the
halt-on-first-failure policy.
"""

from specnest.reporting.driver import (
    FAILURE_EXIT_CODE,
    Driver,
    RunResult,
    run_or_exit,
)
from specnest.reporting.reporter import (
    DEFAULT_LABELS,
    Reporter,
    ReporterConfig,
    format_line,
)

__all__ = [
    "Driver",
    "RunResult",
    "run_or_exit",
    "FAILURE_EXIT_CODE",
    "Reporter",
    "ReporterConfig",
    "DEFAULT_LABELS",
    "format_line",
]
