"""Agent invoker: one validated call to the external agent."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from commit_creator.adapters.process import echo_to_stderr
from commit_creator.agents.execution.events import format_for_display, interpret_last_line
from commit_creator.agents.execution.protocol import AgentExecutor
from commit_creator.agents.execution.types import AgentRequest
from commit_creator.workflow.exceptions import CommitCreatorError
from commit_creator.workflow.interface import VersionControl
from commit_creator.workflow.models import SENTINEL_NAMES

logger = logging.getLogger(__name__)

PROMPT_RULE = "-----"


class AgentInvoker:
    """Sends a prompt to the agent and checks what comes back.

    Every untracked file the agent creates during the call, other than the
    two sentinel files, is deleted again before ``invoke`` returns or raises.
    """

    def __init__(
        self,
        executor: AgentExecutor,
        git: VersionControl,
        working_dir: Path,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self._executor = executor
        self._git = git
        self._working_dir = working_dir
        self._echo = echo or echo_to_stderr

    async def invoke(self, request: AgentRequest) -> str | None:
        """Run ``request``; returns the result text in capture mode, else None."""
        if not request.prompt.strip():
            raise ValueError("Agent prompt must not be empty")

        if not request.capture_result_text:
            self._echo(PROMPT_RULE)
            self._echo(request.prompt)
            self._echo(PROMPT_RULE)

        before = await self._git.untracked_files()
        try:
            final_line = None
            line_count = 0
            async for line in self._executor.stream(request.prompt, self._working_dir):
                if not line.strip():
                    continue
                final_line = line
                line_count += 1
                if not request.capture_result_text:
                    self._echo(format_for_display(line))
            logger.debug("agent (%s) emitted %d lines", self._executor.name, line_count)
            return interpret_last_line(final_line, request)
        finally:
            await self._remove_agent_artifacts(before)

    async def _remove_agent_artifacts(self, before: set[str]) -> None:
        try:
            after = await self._git.untracked_files()
        except CommitCreatorError as e:
            logger.warning("Could not list files created by the agent: %s", e)
            return
        for rel in sorted(after - before - SENTINEL_NAMES):
            path = self._working_dir / rel
            logger.info("Removing file created by the agent: %s", rel)
            path.unlink(missing_ok=True)
