"""Tests for committing and publishing (remote creation and push)."""

from __future__ import annotations

import pytest

from commit_creator.adapters.memory import InMemoryGit, InMemoryHosting
from commit_creator.execution.config import PipelineConfig
from commit_creator.execution.publish import CommitPublisher
from commit_creator.workflow.exceptions import CommitFailedError, PublishFailedError
from commit_creator.workflow.models import PublishStatus

ORIGIN = {"origin": "https://github.com/octocat/demo.git"}


@pytest.fixture
def publish_ctx(make_context, working_dir):
    def _make(git=None, should_push=True, **hosting_kwargs):
        git = git or InMemoryGit(working_dir, changes=["app.py"])
        config = PipelineConfig(project_name="demo", agent_executable="claude", should_push=should_push)
        hosting = InMemoryHosting(git, **hosting_kwargs)
        return make_context(git=git, config=config, hosting=hosting), git, hosting

    return _make


class TestCommit:
    async def test_commit_records_message_and_echoes_summary(self, publish_ctx, echoed):
        ctx, git, _ = publish_ctx()
        await git.stage_all()
        await CommitPublisher(ctx).commit("Add user login form")
        assert git.commits == ["Add user login form"]
        assert any("Add user login form" in line for line in echoed)

    async def test_commit_failure(self, publish_ctx, working_dir):
        ctx, _, _ = publish_ctx(git=InMemoryGit(working_dir, commit_returncode=1))
        with pytest.raises(CommitFailedError):
            await CommitPublisher(ctx).commit("msg")

    async def test_empty_message_never_reaches_git(self, publish_ctx):
        ctx, git, _ = publish_ctx()
        with pytest.raises(CommitFailedError):
            await CommitPublisher(ctx).commit("  ")
        assert git.commits == []


class TestPublish:
    async def test_push_disabled(self, publish_ctx):
        ctx, git, hosting = publish_ctx(should_push=False)
        assert await CommitPublisher(ctx).publish(committed=True) is PublishStatus.PUSH_SKIPPED
        assert git.pushes == []
        assert hosting.create_attempts == []

    async def test_worktree_skipped(self, publish_ctx, working_dir):
        ctx, git, hosting = publish_ctx(git=InMemoryGit(working_dir, worktree=True))
        assert await CommitPublisher(ctx).publish(committed=True) is PublishStatus.WORKTREE_SKIPPED
        assert git.pushes == []
        assert hosting.create_attempts == []

    async def test_existing_remote_pushes_current_branch(self, publish_ctx, working_dir):
        git = InMemoryGit(working_dir, remotes=ORIGIN, branch="feature/login")
        ctx, _, _ = publish_ctx(git=git)
        assert await CommitPublisher(ctx).publish(committed=True) is PublishStatus.PUSHED
        assert git.pushes == [("origin", "feature/login", False)]

    async def test_push_failure_keeps_commit(self, publish_ctx, working_dir):
        git = InMemoryGit(working_dir, changes=["a"], remotes=ORIGIN, push_returncode=1)
        ctx, _, _ = publish_ctx(git=git)
        publisher = CommitPublisher(ctx)
        await git.stage_all()
        await publisher.commit("Add a")
        with pytest.raises(PublishFailedError) as exc:
            await publisher.publish(committed=True)
        assert exc.value.commit_created
        assert "Commit was created successfully but not pushed." in str(exc.value)
        assert git.commits == ["Add a"]

    async def test_second_publish_is_noop(self, publish_ctx, working_dir):
        git = InMemoryGit(working_dir, remotes=ORIGIN)
        ctx, _, _ = publish_ctx(git=git)
        publisher = CommitPublisher(ctx)
        assert await publisher.publish(committed=False) is PublishStatus.PUSHED
        assert await publisher.publish(committed=False) is PublishStatus.PUSHED
        assert git.unpushed_commit_count == 0
        assert len(git.pushes) == 2

    async def test_creates_private_repo_named_after_directory(self, publish_ctx):
        ctx, git, hosting = publish_ctx()
        assert await CommitPublisher(ctx).publish(committed=True) is PublishStatus.REMOTE_CREATED
        assert hosting.created == ["demo"]
        assert git.remotes["origin"] == "https://github.com/octocat/demo.git"

    async def test_gh_missing(self, publish_ctx):
        ctx, _, _ = publish_ctx(installed=False)
        with pytest.raises(PublishFailedError) as exc:
            await CommitPublisher(ctx).publish(committed=True)
        assert "not installed" in str(exc.value)

    async def test_gh_unauthenticated(self, publish_ctx):
        ctx, _, hosting = publish_ctx(authenticated=False)
        with pytest.raises(PublishFailedError) as exc:
            await CommitPublisher(ctx).publish(committed=False)
        assert "gh auth login" in str(exc.value)
        assert not exc.value.commit_created
        assert hosting.create_attempts == []

    async def test_create_collision_falls_back_to_existing_repo(self, publish_ctx):
        ctx, git, _ = publish_ctx(create_succeeds=False)
        assert await CommitPublisher(ctx).publish(committed=True) is PublishStatus.REMOTE_CREATED
        assert git.remotes["origin"] == "https://github.com/octocat/demo.git"
        assert git.pushes == [("origin", "main", False)]

    async def test_rejected_fallback_push_is_forced(self, publish_ctx, working_dir):
        git = InMemoryGit(working_dir, push_rejections=1)
        ctx, _, _ = publish_ctx(git=git, create_succeeds=False)
        await CommitPublisher(ctx).publish(committed=True)
        assert git.pushes == [("origin", "main", False), ("origin", "main", True)]

    async def test_fallback_without_user_fails(self, publish_ctx):
        ctx, git, _ = publish_ctx(create_succeeds=False, user=None)
        with pytest.raises(PublishFailedError):
            await CommitPublisher(ctx).publish(committed=True)
        assert git.pushes == []

    async def test_regular_push_is_never_forced(self, publish_ctx, working_dir):
        git = InMemoryGit(working_dir, remotes=ORIGIN, push_rejections=1)
        ctx, _, _ = publish_ctx(git=git)
        with pytest.raises(PublishFailedError):
            await CommitPublisher(ctx).publish(committed=True)
        assert git.pushes == [("origin", "main", False)]
