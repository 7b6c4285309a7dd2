"""Staging of working-tree changes."""

from __future__ import annotations

import logging

from commit_creator.workflow.interface import VersionControl

logger = logging.getLogger(__name__)


class ChangeStager:
    def __init__(self, git: VersionControl) -> None:
        self._git = git

    async def stage(self) -> bool:
        """Stage everything. Returns False when nothing ends up staged."""
        logger.info("Adding all files to git...")
        await self._git.stage_all()
        staged = await self._git.staged_files()
        logger.debug("staged %d file(s)", len(staged))
        return bool(staged)
