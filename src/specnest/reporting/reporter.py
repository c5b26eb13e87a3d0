"""
Console reporting of example outcomes.

One plain-text line per outcome: passed examples go to the output stream,
pending, failed and errored ones to the error stream.
"""

import sys
from typing import TextIO

from attrs import Factory, frozen

from specnest.core.types import OutcomeTag
from specnest.execution.runner import ExecutionOutcome

DEFAULT_LABELS = {
    OutcomeTag.PASSED: "Success",
    OutcomeTag.PENDING: "Warning",
    OutcomeTag.FAILED: "Failure",
    OutcomeTag.ERRORED: "Error",
}


@frozen
class ReporterConfig:
    """Where and how outcome lines are written.

    Streams left as None resolve to `sys.stdout` / `sys.stderr` at write
    time, so stream redirection after construction is honored.
    """

    out: TextIO | None = None
    err: TextIO | None = None
    labels: dict[OutcomeTag, str] = Factory(lambda: dict(DEFAULT_LABELS))

    def stream_for(self, tag: OutcomeTag) -> TextIO:
        if tag is OutcomeTag.PASSED:
            return self.out if self.out is not None else sys.stdout
        return self.err if self.err is not None else sys.stderr


def format_line(outcome: ExecutionOutcome, labels: dict[OutcomeTag, str] | None = None) -> str:
    """
    Format an outcome as a console line.

    Params:
        outcome: The outcome to format
        labels: Label per outcome tag, defaults to `DEFAULT_LABELS`

    Returns:
        `<Label>: <diagnostic>.` with the period omitted when the diagnostic
        already ends in punctuation
    """
    label = (labels or DEFAULT_LABELS).get(outcome.tag, outcome.tag.value.capitalize())
    text = outcome.diagnostic.rstrip()
    if not text.endswith((".", "!", "?")):
        text += "."
    return f"{label}: {text}"


class Reporter:
    """Writes one line per outcome."""

    def __init__(self, config: ReporterConfig | None = None):
        self.config = config or ReporterConfig()

    def report(self, outcome: ExecutionOutcome) -> str:
        line = format_line(outcome, self.config.labels)
        stream = self.config.stream_for(outcome.tag)
        stream.write(line + "\n")
        stream.flush()
        return line
