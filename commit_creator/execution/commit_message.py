"""Commit message stage: the agent drafts the message, the rules vet it."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from commit_creator.agents.context import gather_context
from commit_creator.agents.definitions import commit_message_prompt
from commit_creator.agents.execution.types import AgentRequest
from commit_creator.execution.context import PipelineContext
from commit_creator.workflow.exceptions import EmptyOrRejectedCommitMessageError

logger = logging.getLogger(__name__)

# Preamble some drafts start with, e.g. "Commit message: Add login form".
BOILERPLATE_PREFIX = re.compile(r"\A\s*commit message:[ \t]*\n?", re.IGNORECASE)


@dataclass(frozen=True)
class CommitMessageRules:
    """Post-processing applied to every drafted message.

    forbidden_word: exact, case-sensitive substring that rejects a message
    wherever it appears. None disables the rule.
    """

    forbidden_word: str | None = None

    def apply(self, text: str | None) -> str:
        if not text or not text.strip():
            raise EmptyOrRejectedCommitMessageError("No commit message was generated!")

        message = BOILERPLATE_PREFIX.sub("", text, count=1).strip()
        if not message:
            raise EmptyOrRejectedCommitMessageError(
                "The generated commit message was empty after removing its prefix"
            )

        if self.forbidden_word and self.forbidden_word in message:
            raise EmptyOrRejectedCommitMessageError(
                f"The generated commit message contains the forbidden word "
                f"{self.forbidden_word!r}:\n{message}"
            )
        return message


class CommitMessageStage:
    def __init__(self, ctx: PipelineContext) -> None:
        self._ctx = ctx
        self.rules = CommitMessageRules(forbidden_word=ctx.config.forbidden_word)

    async def run(self) -> str:
        logger.info("Generating commit message...")
        ctx = self._ctx
        context = await gather_context(ctx.processes, ctx.git, ctx.working_dir)
        text = await ctx.invoker().invoke(
            AgentRequest(
                prompt=commit_message_prompt(context),
                validate_result=True,
                capture_result_text=True,
            )
        )
        return self.rules.apply(text)
