"""
Example execution for specnest.

`ExampleRunner.run` executes one example against a fresh `ExampleScope` and
classifies what happened as an `ExecutionOutcome`. Authoring errors are not
outcomes: they propagate to whoever started the run.
"""

import logging

from pydantic import BaseModel, ConfigDict

from specnest.core.group_node import ExampleNode
from specnest.core.types import OutcomeTag
from specnest.exceptions import (
    AuthoringError,
    ExpectationFailure,
    Fault,
    describe_fault,
)
from specnest.execution.exam import Evaluator, evaluate
from specnest.execution.scope import ExampleScope
from specnest.structure.builder import DEFAULT_PENDING_MESSAGE
from specnest.structure.utils import call_with_arity

logger = logging.getLogger(__name__)


class ExecutionOutcome(BaseModel):
    """Classification of one example run, consumed by the reporter."""

    model_config = ConfigDict(frozen=True)

    tag: OutcomeTag
    description: str
    diagnostic: str

    @property
    def halts(self) -> bool:
        return self.tag.halts


class ExampleRunner:
    """Runs single examples and turns their results into outcomes.

    - Pending examples are reported without touching their body.
    - A body that finishes passes; its diagnostic is the last expectation's
      summary, or the example's description when it asserted nothing.
    - `ExpectationFailure` becomes a failed outcome.
    - `Fault`, and any other exception escaping the body, becomes errored.
    """

    def __init__(self, evaluator: Evaluator = evaluate):
        self._evaluator = evaluator

    def run(self, example: ExampleNode) -> ExecutionOutcome:
        """
        Execute one example.

        Params:
            example: The example node to run

        Returns:
            ExecutionOutcome tagged passed, failed, errored or pending

        Raises:
            AuthoringError: When the example's declarations are inconsistent
                (undefined helpers, missing outer definitions, ...)
        """
        description = example.display_name

        if example.is_pending:
            message = example.pending_message or DEFAULT_PENDING_MESSAGE
            logger.debug("Skipping pending example '%s'", description)
            return ExecutionOutcome(
                tag=OutcomeTag.PENDING, description=description, diagnostic=message
            )

        scope = ExampleScope(example, evaluator=self._evaluator)
        logger.debug("Running example '%s'", description)

        try:
            call_with_arity(example.body, scope)
        except AuthoringError:
            raise
        except ExpectationFailure as failure:
            return self._outcome(OutcomeTag.FAILED, description, str(failure))
        except Fault as fault:
            return self._outcome(OutcomeTag.ERRORED, description, str(fault))
        except Exception as error:
            return self._outcome(OutcomeTag.ERRORED, description, describe_fault(error))

        successes = scope.successes
        diagnostic = successes[-1].summary if successes else description
        return self._outcome(OutcomeTag.PASSED, description, diagnostic)

    def _outcome(self, tag: OutcomeTag, description: str, diagnostic: str) -> ExecutionOutcome:
        logger.debug("Example '%s' %s", description, tag.value)
        return ExecutionOutcome(tag=tag, description=description, diagnostic=diagnostic)
