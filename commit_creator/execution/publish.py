"""Commit & publish stage."""

from __future__ import annotations

import logging

from commit_creator.execution.context import PipelineContext
from commit_creator.workflow.exceptions import CommitFailedError, PublishFailedError
from commit_creator.workflow.models import PublishStatus

logger = logging.getLogger(__name__)

REMOTE = "origin"


class CommitPublisher:
    """Creates the commit and keeps the remote in sync.

    A publish failure never undoes a commit that was already created.
    """

    def __init__(self, ctx: PipelineContext) -> None:
        self._ctx = ctx

    async def commit(self, message: str) -> None:
        if not message.strip():
            raise CommitFailedError(returncode=-1, output="refusing to commit with an empty message")
        logger.info("Creating commit with message:\n%s", message)
        result = await self._ctx.git.commit(message)
        if not result.ok:
            logger.error("%s", result.output.rstrip())
            raise CommitFailedError(result.returncode, result.output)
        logger.info("Commit created successfully!")
        summary = await self._ctx.git.show_stat()
        if summary.strip():
            self._ctx.echo(summary.rstrip())

    async def publish(self, committed: bool) -> PublishStatus:
        """Make sure the remote exists and has the current branch."""
        ctx = self._ctx
        if not ctx.config.should_push:
            logger.info("Skipping push (--no-push).")
            return PublishStatus.PUSH_SKIPPED
        if await ctx.git.is_worktree():
            logger.info("Skipping push inside a git worktree.")
            return PublishStatus.WORKTREE_SKIPPED

        if await ctx.git.remote_url(REMOTE) is None:
            await self._create_remote(committed)
            return PublishStatus.REMOTE_CREATED

        logger.info("Pushing to %s...", REMOTE)
        branch = await ctx.git.current_branch()
        result = await ctx.git.push(REMOTE, branch)
        if not result.ok:
            logger.error("%s", result.output.rstrip())
            raise PublishFailedError(f"Failed to push to {REMOTE}.", commit_created=committed)
        logger.info("Pushed successfully!")
        return PublishStatus.PUSHED

    async def _create_remote(self, committed: bool) -> None:
        ctx = self._ctx
        name = ctx.config.project_name or ctx.working_dir.resolve().name
        logger.info("No %s remote found. Creating git repository...", REMOTE)

        if not ctx.hosting.is_installed():
            raise PublishFailedError(
                "GitHub CLI (gh) is not installed. Please install it to create a remote repository.",
                commit_created=committed,
            )
        if not await ctx.hosting.is_authenticated():
            raise PublishFailedError(
                "GitHub CLI is not authenticated. Please run 'gh auth login' first.",
                commit_created=committed,
            )

        logger.info("Creating private git repository: %s", name)
        if await ctx.hosting.create_private_repo(name):
            logger.info("Repository created and pushed successfully!")
            return

        # Usually the repository already exists on the host; wire it up by hand.
        logger.warning("Could not create %s; trying to use an existing repository", name)
        owner = await ctx.hosting.authenticated_user()
        if owner is None:
            raise PublishFailedError(
                "Failed to create git repository and could not determine the GitHub user.",
                commit_created=committed,
            )
        url = ctx.hosting.repo_url(owner, name)
        if await ctx.git.remote_url(REMOTE) is None:
            added = await ctx.git.add_remote(REMOTE, url)
            if not added.ok:
                raise PublishFailedError(
                    f"Failed to add remote {REMOTE} ({url}): {added.output.strip()}",
                    commit_created=committed,
                )

        branch = await ctx.git.current_branch()
        result = await ctx.git.push(REMOTE, branch)
        if result.ok:
            logger.info("Pushed to existing repository %s", url)
            return

        logger.warning("Push to %s was rejected; force-pushing %s", url, branch)
        forced = await ctx.git.push(REMOTE, branch, force=True)
        if not forced.ok:
            logger.error("%s", forced.output.rstrip())
            raise PublishFailedError(f"Failed to push to {url}.", commit_created=committed)
        logger.info("Force-pushed to existing repository %s", url)
