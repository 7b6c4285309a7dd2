"""Read-only preconditions checked before anything is modified."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from commit_creator.execution.config import REQUIRED_EXECUTABLES
from commit_creator.execution.context import PipelineContext
from commit_creator.workflow.exceptions import MissingDependencyError, NotARepositoryError

logger = logging.getLogger(__name__)


class EnvironmentProbe:
    def __init__(self, ctx: PipelineContext) -> None:
        self._ctx = ctx

    def missing_executables(self) -> list[str]:
        """Every missing executable, described. Empty when all are present."""
        missing = [
            f"{name}: {purpose}"
            for name, purpose in REQUIRED_EXECUTABLES.items()
            if self._ctx.processes.which(name) is None
        ]
        agent = self._ctx.config.agent_executable
        if not self._agent_available(agent):
            missing.append(
                f"claude: agent executable not found at {agent} (set CLAUDE_EXECUTABLE)"
            )
        return missing

    def _agent_available(self, executable: str) -> bool:
        if os.sep in executable or (os.altsep and os.altsep in executable):
            path = Path(executable).expanduser()
            return path.is_file() and os.access(path, os.X_OK)
        return self._ctx.processes.which(executable) is not None

    async def verify(self) -> None:
        missing = self.missing_executables()
        if missing:
            raise MissingDependencyError(missing)
        if not await self._ctx.git.is_repository():
            raise NotARepositoryError(self._ctx.working_dir)
        logger.debug("environment ok: %s", self._ctx.working_dir)
