"""Security review stage: the agent reviews the staged changes and reports
its verdict through one of two sentinel files."""

from __future__ import annotations

import logging

from commit_creator.agents.context import gather_context
from commit_creator.agents.definitions import security_check_prompt
from commit_creator.agents.execution.types import AgentRequest
from commit_creator.execution.context import PipelineContext
from commit_creator.workflow.exceptions import (
    SecurityCheckFailedError,
    SecurityCheckIncompleteError,
)
from commit_creator.workflow.models import SUCCEEDED_SENTINEL, SecurityVerdict, VerdictOutcome

logger = logging.getLogger(__name__)

SKIP_WARNING = (
    "WARNING: --dangerously-skip-security-check is set. "
    "The staged changes will be committed WITHOUT a security review."
)


class SecurityReviewStage:
    def __init__(self, ctx: PipelineContext) -> None:
        self._ctx = ctx

    async def run(self) -> SecurityVerdict:
        """Review the staged changes. Raises unless the agent reported a pass."""
        logger.info("Running security check...")
        ctx = self._ctx
        context = await gather_context(ctx.processes, ctx.git, ctx.working_dir)
        await ctx.invoker().invoke(
            AgentRequest(prompt=security_check_prompt(context), validate_result=True)
        )

        verdict = ctx.verdicts.consume()
        if verdict.outcome is VerdictOutcome.CONFLICTING:
            logger.warning("The agent wrote both a succeeded and a failed security report")
        if verdict.outcome in (VerdictOutcome.FAILED, VerdictOutcome.CONFLICTING):
            raise SecurityCheckFailedError(verdict.report)
        if verdict.outcome is VerdictOutcome.MISSING:
            raise SecurityCheckIncompleteError(SUCCEEDED_SENTINEL)

        logger.info("Security check passed.")
        return verdict
