"""Read-only repository context embedded in agent prompts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from commit_creator.workflow.interface import ProcessRunner, VersionControl
from commit_creator.workflow.models import CommandResult

TREE_COMMAND = "tree --gitignore"
DIFF_COMMAND = "git --no-pager diff --cached"
STATUS_COMMAND = "git status --porcelain"


@dataclass
class RepositoryContext:
    tree: str
    diff: str
    status: str


def _captured(result: CommandResult, label: str) -> str:
    """Output of a context command; a failure degrades to an error note."""
    if result.ok:
        return result.output
    return f"{result.output}{label} failed (exit {result.returncode})"


async def gather_context(
    runner: ProcessRunner, git: VersionControl, working_dir: Path
) -> RepositoryContext:
    """Collect tree, staged diff and status. Never raises for a failing command."""
    tree = await runner.run("tree", "--gitignore", cwd=working_dir)
    diff = await git.staged_diff()
    status = await git.status()
    return RepositoryContext(
        tree=_captured(tree, "tree command"),
        diff=_captured(diff, "git diff"),
        status=_captured(status, "git status"),
    )
