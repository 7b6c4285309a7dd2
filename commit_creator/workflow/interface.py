"""Capability protocols the workflow depends on.

Stages only talk to these interfaces; ``commit_creator.adapters`` holds the
subprocess-backed implementations and the in-memory doubles used by tests.
"""

from pathlib import Path
from typing import Protocol

from .models import CommandResult, SecurityVerdict


class ProcessRunner(Protocol):
    """Runs external programs."""

    def which(self, name: str) -> str | None: ...

    async def run(
        self, *args: str, cwd: Path | None = None, input: str | None = None
    ) -> CommandResult: ...

    async def run_streaming(self, *args: str, cwd: Path | None = None) -> int:
        """Run a command, echoing its combined output line by line. Returns the exit code."""
        ...


class VersionControl(Protocol):
    """Read/write operations on the git working tree."""

    async def is_repository(self) -> bool: ...

    async def is_worktree(self) -> bool: ...

    async def stage_all(self) -> None: ...

    async def staged_files(self) -> list[str]: ...

    async def staged_diff(self) -> CommandResult: ...

    async def status(self) -> CommandResult: ...

    async def untracked_files(self) -> set[str]: ...

    async def commit(self, message: str) -> CommandResult: ...

    async def show_stat(self) -> str: ...

    async def remote_url(self, name: str = "origin") -> str | None: ...

    async def add_remote(self, name: str, url: str) -> CommandResult: ...

    async def current_branch(self) -> str: ...

    async def push(
        self, remote: str, branch: str, force: bool = False
    ) -> CommandResult: ...


class HostingService(Protocol):
    """Repository hosting CLI used to create the remote."""

    def is_installed(self) -> bool: ...

    async def is_authenticated(self) -> bool: ...

    async def create_private_repo(self, name: str) -> bool: ...

    async def authenticated_user(self) -> str | None: ...

    def repo_url(self, owner: str, name: str) -> str: ...


class Notifier(Protocol):
    async def notify(self, title: str, body: str) -> None: ...


class VerdictChannel(Protocol):
    """The sentinel-file handoff between the agent and the workflow."""

    def clear(self) -> None: ...

    def read(self) -> SecurityVerdict: ...

    def consume(self) -> SecurityVerdict:
        """Read the verdict and remove both sentinel files."""
        ...
