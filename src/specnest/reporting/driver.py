"""
Run driver for specnest group trees.

The driver walks a sealed tree depth-first, runs each example, hands every
outcome to the reporter and stops at the first failed or errored outcome.
Nothing after the halt point is executed or reported. Only `run_or_exit`
turns a halted run into process termination.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from specnest.core.group_node import GroupNode
from specnest.core.types import OutcomeTag
from specnest.execution.runner import ExampleRunner, ExecutionOutcome
from specnest.reporting.reporter import Reporter

logger = logging.getLogger(__name__)

FAILURE_EXIT_CODE = 1


class RunResult(BaseModel):
    """Summary of one driver run."""

    model_config = ConfigDict(frozen=True)

    executed: int = 0
    counts: dict[OutcomeTag, int] = Field(default_factory=dict)
    halting_outcome: ExecutionOutcome | None = None

    @property
    def halted(self) -> bool:
        return self.halting_outcome is not None

    def count(self, tag: OutcomeTag) -> int:
        return self.counts.get(tag, 0)


class Driver:
    """Runs a group tree in declaration order with halt-on-first-failure.

    State machine: INIT -> RUNNING(example_i) -> passed/pending advance,
    failed/errored HALT. There is no retry and no resumption past a halt.
    """

    def __init__(self, runner: ExampleRunner | None = None, reporter: Reporter | None = None):
        self.runner = runner or ExampleRunner()
        self.reporter = reporter or Reporter()

    def run(self, root: GroupNode) -> RunResult:
        """
        Run every example under `root` until one fails or errors.

        Params:
            root: Sealed group tree to run

        Returns:
            RunResult with per-tag counts and the halting outcome, if any

        Raises:
            AuthoringError: Propagated unchanged from the runner
        """
        counts: dict[OutcomeTag, int] = {}
        executed = 0

        for example in root.walk():
            outcome = self.runner.run(example)
            self.reporter.report(outcome)
            executed += 1
            counts[outcome.tag] = counts.get(outcome.tag, 0) + 1

            if outcome.halts:
                logger.debug(
                    "Halting run of '%s' after '%s'", root.text, outcome.description
                )
                return RunResult(executed=executed, counts=counts, halting_outcome=outcome)

        return RunResult(executed=executed, counts=counts)


def run_or_exit(root: GroupNode, driver: Driver | None = None) -> RunResult:
    """
    Run `root` and terminate the process if the run halted.

    Params:
        root: Sealed group tree to run
        driver: Driver to use, a default one when omitted

    Returns:
        RunResult of a run that did not halt

    Raises:
        SystemExit: With `FAILURE_EXIT_CODE` when an example failed or errored
    """
    result = (driver or Driver()).run(root)
    if result.halted:
        raise SystemExit(FAILURE_EXIT_CODE)
    return result
