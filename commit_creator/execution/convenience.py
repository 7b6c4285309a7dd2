"""Convenience functions for wiring a pipeline run."""

from __future__ import annotations

from pathlib import Path

from commit_creator.adapters.git import GitBackend
from commit_creator.adapters.github import GitHubCli
from commit_creator.adapters.notify import DesktopNotifier
from commit_creator.adapters.process import SubprocessRunner
from commit_creator.adapters.sentinel import SentinelFiles
from commit_creator.agents.execution.protocol import AgentExecutor
from commit_creator.execution.config import PipelineConfig
from commit_creator.execution.context import PipelineContext
from commit_creator.execution.runner import CommitPipeline, RunResult


def create_executor(config: PipelineConfig) -> AgentExecutor:
    """The agent backend selected by ``config.agent_backend``."""
    if config.agent_backend == "sdk":
        from commit_creator.agents.execution.claude_code import ClaudeCodeExecutor

        return ClaudeCodeExecutor(executable=config.agent_executable, model=config.model)

    from commit_creator.agents.execution.claude_cli import ClaudeCliExecutor

    return ClaudeCliExecutor(executable=config.agent_executable, model=config.model)


def create_default_context(
    config: PipelineConfig,
    working_dir: Path,
    executor: AgentExecutor | None = None,
) -> PipelineContext:
    """A context backed by the real git, gh, notify-send and agent."""
    runner = SubprocessRunner()
    return PipelineContext(
        config=config,
        working_dir=working_dir,
        processes=runner,
        git=GitBackend(runner, working_dir),
        hosting=GitHubCli(runner, working_dir),
        notifier=DesktopNotifier(runner),
        agent=executor or create_executor(config),
        verdicts=SentinelFiles(working_dir),
    )


async def run_commit(config: PipelineConfig, working_dir: Path | None = None) -> RunResult:
    """Run the full commit workflow in ``working_dir`` (default: cwd)."""
    working_dir = working_dir or Path.cwd()
    ctx = create_default_context(config, working_dir)
    return await CommitPipeline(ctx).run()
