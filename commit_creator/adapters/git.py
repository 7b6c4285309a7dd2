"""VersionControl backed by the git CLI."""

from __future__ import annotations

from pathlib import Path

from ..workflow.exceptions import GitCommandError
from ..workflow.interface import ProcessRunner
from ..workflow.models import CommandResult


class GitBackend:
    """Runs git commands inside one working directory."""

    def __init__(self, runner: ProcessRunner, working_dir: Path):
        self._runner = runner
        self._cwd = working_dir

    async def _git(self, *args: str) -> CommandResult:
        return await self._runner.run("git", *args, cwd=self._cwd)

    async def _checked(self, *args: str) -> str:
        result = await self._git(*args)
        if not result.ok:
            raise GitCommandError(args, result.returncode, result.stderr)
        return result.stdout

    async def is_repository(self) -> bool:
        return (await self._git("rev-parse", "--git-dir")).ok

    async def is_worktree(self) -> bool:
        """True inside a secondary checkout created with ``git worktree add``."""
        git_dir = (await self._checked("rev-parse", "--absolute-git-dir")).strip()
        common_dir = (await self._checked("rev-parse", "--git-common-dir")).strip()
        common = Path(common_dir)
        if not common.is_absolute():
            common = self._cwd / common
        return Path(git_dir).resolve() != common.resolve()

    async def stage_all(self) -> None:
        await self._checked("add", "--all")

    async def staged_files(self) -> list[str]:
        out = await self._checked("diff", "--cached", "--name-only")
        return [line for line in out.splitlines() if line.strip()]

    async def staged_diff(self) -> CommandResult:
        return await self._git("--no-pager", "diff", "--cached")

    async def status(self) -> CommandResult:
        return await self._git("status", "--porcelain")

    async def untracked_files(self) -> set[str]:
        out = await self._checked("ls-files", "--others", "--exclude-standard", "-z")
        return {path for path in out.split("\0") if path}

    async def commit(self, message: str) -> CommandResult:
        return await self._git("commit", "-m", message)

    async def show_stat(self) -> str:
        result = await self._git("--no-pager", "show", "--stat")
        return result.output

    async def remote_url(self, name: str = "origin") -> str | None:
        result = await self._git("remote", "get-url", name)
        if not result.ok:
            return None
        return result.stdout.strip() or None

    async def add_remote(self, name: str, url: str) -> CommandResult:
        return await self._git("remote", "add", name, url)

    async def current_branch(self) -> str:
        return (await self._checked("rev-parse", "--abbrev-ref", "HEAD")).strip()

    async def push(self, remote: str, branch: str, force: bool = False) -> CommandResult:
        args = ["push", "-u"]
        if force:
            args.append("--force")
        args.extend([remote, branch])
        return await self._git(*args)
