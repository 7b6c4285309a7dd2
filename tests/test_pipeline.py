"""End-to-end pipeline tests over in-memory git and a scripted agent."""

from __future__ import annotations

import json
import logging

import pytest

from commit_creator.adapters.memory import InMemoryGit, RecordingNotifier, ScriptedProcessRunner
from commit_creator.agents.execution.mocks import ScriptedAgentExecutor, result_line
from commit_creator.execution.config import PipelineConfig
from commit_creator.execution.runner import CommitPipeline
from commit_creator.execution.staging import ChangeStager
from commit_creator.workflow.exceptions import (
    AgentProcessFailedError,
    EmptyOrRejectedCommitMessageError,
    InvalidManifestError,
    MissingDependencyError,
    NotARepositoryError,
    PublishFailedError,
    SecurityCheckFailedError,
    SecurityCheckIncompleteError,
    TestsFailedError,
)
from commit_creator.workflow.models import (
    FAILED_SENTINEL,
    SUCCEEDED_SENTINEL,
    PublishStatus,
    RunOutcome,
)

ORIGIN = {"origin": "https://github.com/octocat/demo.git"}


def _security_pass(report: str = "No issues found") -> dict:
    return {"files": {SUCCEEDED_SENTINEL: report}, "lines": [result_line("Review done")]}


def _message(text: str) -> dict:
    return {"lines": [result_line(text)]}


def _config(**overrides) -> PipelineConfig:
    values = {"project_name": "demo", "agent_executable": "claude", "forbidden_word": "Claude"}
    values.update(overrides)
    return PipelineConfig(**values)


def _sentinels_left(working_dir) -> list[str]:
    return [n for n in (SUCCEEDED_SENTINEL, FAILED_SENTINEL) if (working_dir / n).exists()]


class TestHappyPath:
    async def test_commit_with_agent_message(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["login.html"], remotes=ORIGIN)
        notifier = RecordingNotifier()
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add user login form"))
        ctx = make_context(agent=agent, git=git, notifier=notifier, config=_config())

        result = await CommitPipeline(ctx).run()

        assert result.outcome is RunOutcome.COMMITTED
        assert result.exit_code == 0
        assert git.commits == ["Add user login form"]
        assert result.publish is PublishStatus.PUSHED
        assert _sentinels_left(working_dir) == []
        assert agent.call_count == 2
        assert len(notifier.notifications) == 1
        title, body = notifier.notifications[0]
        assert "Commit Created" in title
        assert "Add user login form" in body

    async def test_no_push(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a.py"])
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add a"))
        ctx = make_context(agent=agent, git=git, config=_config(should_push=False))

        result = await CommitPipeline(ctx).run()

        assert git.commits == ["Add a"]
        assert git.pushes == []
        assert ctx.hosting.create_attempts == []
        assert result.publish is PublishStatus.PUSH_SKIPPED
        assert "Push skipped" in ctx.notifier.notifications[0][1]

    async def test_first_commit_creates_remote(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["README.md"])
        agent = ScriptedAgentExecutor(_security_pass(), _message("Initial commit"))
        ctx = make_context(agent=agent, git=git, config=_config())

        result = await CommitPipeline(ctx).run()

        assert result.publish is PublishStatus.REMOTE_CREATED
        assert ctx.hosting.created == ["demo"]

    async def test_skip_security_check_warns(self, make_context, working_dir, caplog):
        git = InMemoryGit(working_dir, changes=["a.py"])
        agent = ScriptedAgentExecutor(_message("Add a"))
        ctx = make_context(agent=agent, git=git, config=_config(should_push=False, skip_security_check=True))

        with caplog.at_level(logging.WARNING):
            result = await CommitPipeline(ctx).run()

        assert result.success
        assert agent.call_count == 1
        assert "dangerously-skip-security-check" in caplog.text

    async def test_stale_sentinels_cleared_before_staging(self, make_context, working_dir):
        (working_dir / FAILED_SENTINEL).write_text("from an earlier run")
        git = InMemoryGit(working_dir, changes=["a.py"])
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add a"))
        ctx = make_context(agent=agent, git=git, config=_config(should_push=False))

        result = await CommitPipeline(ctx).run()

        assert result.success
        assert _sentinels_left(working_dir) == []


class TestNothingStaged:
    async def test_no_commit_but_publish_runs(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=[], remotes=ORIGIN)
        agent = ScriptedAgentExecutor()
        ctx = make_context(agent=agent, git=git, config=_config())

        result = await CommitPipeline(ctx).run()

        assert result.outcome is RunOutcome.SYNCED
        assert result.exit_code == 0
        assert git.commits == []
        assert git.pushes == [("origin", "main", False)]
        assert agent.call_count == 0
        assert "no new changes" in ctx.notifier.notifications[0][1]

    async def test_quality_gate_not_run(self, make_context, working_dir):
        (working_dir / "package.json").write_text(json.dumps({"scripts": {"test": "vitest"}}))
        processes = ScriptedProcessRunner(
            available={"git", "tree", "claude"}, results={("pnpm", "run", "test"): 1}
        )
        git = InMemoryGit(working_dir, changes=[], remotes=ORIGIN)
        ctx = make_context(git=git, processes=processes, config=_config())

        result = await CommitPipeline(ctx).run()

        assert result.success
        assert ("pnpm", "run", "test") not in processes.calls

    async def test_worktree_sync_skipped(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=[], worktree=True)
        ctx = make_context(git=git, config=_config())

        result = await CommitPipeline(ctx).run()

        assert result.publish is PublishStatus.WORKTREE_SKIPPED
        assert git.pushes == []
        assert "worktree" in ctx.notifier.notifications[0][1]


class TestFailures:
    async def _run_failing(self, ctx):
        result = await CommitPipeline(ctx).run()
        assert result.outcome is RunOutcome.FAILED
        assert result.exit_code == 1
        assert len(ctx.notifier.notifications) == 1
        assert "Error" in ctx.notifier.notifications[0][0]
        return result

    async def test_security_failure(self, make_context, working_dir, caplog):
        git = InMemoryGit(working_dir, changes=["config.json"])
        agent = ScriptedAgentExecutor(
            {"files": {FAILED_SENTINEL: "Hardcoded API key in config.json"}, "lines": [result_line("done")]},
            _message("Add config"),
        )
        ctx = make_context(agent=agent, git=git, config=_config())

        with caplog.at_level(logging.ERROR):
            result = await self._run_failing(ctx)

        assert isinstance(result.error, SecurityCheckFailedError)
        assert git.commits == []
        assert agent.call_count == 1
        assert "Hardcoded API key in config.json" in caplog.text
        assert _sentinels_left(working_dir) == []

    async def test_security_incomplete(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a"])
        agent = ScriptedAgentExecutor({"lines": [result_line("forgot the file")]})
        result = await self._run_failing(make_context(agent=agent, git=git, config=_config()))
        assert isinstance(result.error, SecurityCheckIncompleteError)
        assert git.commits == []

    async def test_empty_commit_message(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a"])
        agent = ScriptedAgentExecutor(_security_pass(), _message(""))
        result = await self._run_failing(make_context(agent=agent, git=git, config=_config()))
        assert isinstance(result.error, EmptyOrRejectedCommitMessageError)
        assert git.commits == []
        assert _sentinels_left(working_dir) == []

    async def test_forbidden_word_in_message(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a"])
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add a\n\nWritten with Claude"))
        result = await self._run_failing(make_context(agent=agent, git=git, config=_config()))
        assert isinstance(result.error, EmptyOrRejectedCommitMessageError)
        assert git.commits == []

    async def test_agent_process_failure_cleans_sentinel(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a"])
        agent = ScriptedAgentExecutor({"files": {SUCCEEDED_SENTINEL: "ok", "scratch.txt": "x"}, "exit_code": 1})
        result = await self._run_failing(make_context(agent=agent, git=git, config=_config()))
        assert isinstance(result.error, AgentProcessFailedError)
        assert _sentinels_left(working_dir) == []
        assert not (working_dir / "scratch.txt").exists()

    async def test_tests_fail_before_agent(self, make_context, working_dir):
        (working_dir / "Makefile").write_text("test:\n\tfalse\n")
        processes = ScriptedProcessRunner(available={"git", "tree", "claude"}, results={("make", "test"): 2})
        git = InMemoryGit(working_dir, changes=["a"])
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add a"))
        result = await self._run_failing(
            make_context(agent=agent, git=git, processes=processes, config=_config())
        )
        assert isinstance(result.error, TestsFailedError)
        assert agent.call_count == 0
        assert git.commits == []

    async def test_undecodable_manifest_is_reported(self, make_context, working_dir):
        (working_dir / "pyproject.toml").write_bytes(b'[tool.ruff]\nname = "\xff"\n')
        git = InMemoryGit(working_dir, changes=["a"])
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add a"))
        result = await self._run_failing(make_context(agent=agent, git=git, config=_config()))
        assert isinstance(result.error, InvalidManifestError)
        assert agent.call_count == 0
        assert git.commits == []

    async def test_missing_dependencies_reported_together(self, make_context, working_dir):
        processes = ScriptedProcessRunner(available={"git"})
        git = InMemoryGit(working_dir, changes=["a"])
        result = await self._run_failing(make_context(git=git, processes=processes, config=_config()))
        assert isinstance(result.error, MissingDependencyError)
        assert len(result.error.missing) == 2
        assert git.stage_calls == 0

    async def test_not_a_repository(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a"], is_repo=False)
        result = await self._run_failing(make_context(git=git, config=_config()))
        assert isinstance(result.error, NotARepositoryError)
        assert git.stage_calls == 0

    async def test_push_failure_after_commit(self, make_context, working_dir):
        git = InMemoryGit(working_dir, changes=["a"], remotes=ORIGIN, push_returncode=1)
        agent = ScriptedAgentExecutor(_security_pass(), _message("Add a"))
        ctx = make_context(agent=agent, git=git, config=_config())

        result = await CommitPipeline(ctx).run()

        assert result.exit_code == 1
        assert result.committed
        assert result.commit_message == "Add a"
        assert isinstance(result.error, PublishFailedError)
        assert git.commits == ["Add a"]
        assert "Not Pushed" in ctx.notifier.notifications[0][0]


@pytest.mark.parametrize("gate_fails", [False, True])
async def test_empty_stage_never_commits(make_context, working_dir, gate_fails):
    (working_dir / "Makefile").write_text("test:\n\ttrue\n")
    processes = ScriptedProcessRunner(
        available={"git", "tree", "claude"}, results={("make", "test"): int(gate_fails)}
    )
    git = InMemoryGit(working_dir, changes=[])
    agent = ScriptedAgentExecutor({"files": {FAILED_SENTINEL: "bad"}, "lines": [result_line("x")]})
    ctx = make_context(agent=agent, git=git, processes=processes, config=_config(should_push=False))

    await CommitPipeline(ctx).run()

    assert git.commits == []


class TestChangeStager:
    async def test_stages_everything(self, working_dir):
        git = InMemoryGit(working_dir, changes=["a.py", "b.py"])
        assert await ChangeStager(git).stage()
        assert git.staged == ["a.py", "b.py"]

    async def test_nothing_to_stage(self, working_dir):
        git = InMemoryGit(working_dir)
        assert not await ChangeStager(git).stage()
        assert git.stage_calls == 1
