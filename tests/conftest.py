"""Shared test configuration."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from commit_creator.adapters.memory import (
    InMemoryGit,
    InMemoryHosting,
    RecordingNotifier,
    ScriptedProcessRunner,
)
from commit_creator.adapters.sentinel import SentinelFiles
from commit_creator.agents.execution.mocks import ScriptedAgentExecutor
from commit_creator.execution.config import PipelineConfig
from commit_creator.execution.context import PipelineContext

TOOLS = {"git", "tree", "claude", "gh", "notify-send"}


def pytest_addoption(parser):
    parser.addoption(
        "--run-slow", action="store_true", default=False, help="Run tests against a real claude executable"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="Need --run-slow to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def working_dir(tmp_path):
    return tmp_path


@pytest.fixture
def echoed():
    return []


@pytest.fixture
def make_context(working_dir, echoed):
    """Build a PipelineContext over in-memory doubles; override any piece."""

    def _make(
        agent=None,
        git=None,
        config: PipelineConfig | None = None,
        processes=None,
        hosting=None,
        notifier=None,
    ) -> PipelineContext:
        git = git or InMemoryGit(working_dir, changes=["app.py"])
        return PipelineContext(
            config=config or PipelineConfig(project_name="demo", agent_executable="claude"),
            working_dir=working_dir,
            processes=processes or ScriptedProcessRunner(available=TOOLS),
            git=git,
            hosting=hosting or InMemoryHosting(git),
            notifier=notifier or RecordingNotifier(),
            agent=agent or ScriptedAgentExecutor(),
            verdicts=SentinelFiles(working_dir),
            echo=echoed.append,
        )

    return _make


def git_cmd(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    ).stdout


@pytest.fixture
def git_repo(tmp_path):
    """A real, empty git repository with a committer identity."""
    repo = tmp_path / "demo"
    repo.mkdir()
    git_cmd(repo, "init", "-q", "-b", "main")
    git_cmd(repo, "config", "user.email", "test@example.com")
    git_cmd(repo, "config", "user.name", "Test User")
    git_cmd(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def run_git():
    return git_cmd
