"""In-memory capability doubles. For tests and demos."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..workflow.models import CommandResult


class ScriptedProcessRunner:
    """ProcessRunner that returns canned results and records every call.

    ``results`` maps a command tuple (or its program name) to a CommandResult
    or a bare exit code. Unmatched commands succeed with empty output.
    """

    def __init__(
        self,
        available: set[str] | None = None,
        results: dict | None = None,
    ):
        self.available = set(available or ())
        self._results = dict(results or {})
        self.calls: list[tuple[str, ...]] = []

    def which(self, name: str) -> str | None:
        if name in self.available:
            return f"/usr/bin/{name}"
        return None

    def _result_for(self, args: tuple[str, ...]) -> CommandResult:
        result = self._results.get(args, self._results.get(args[0], 0))
        if isinstance(result, int):
            return CommandResult(returncode=result)
        return result

    async def run(
        self, *args: str, cwd: Path | None = None, input: str | None = None
    ) -> CommandResult:
        self.calls.append(args)
        return self._result_for(args)

    async def run_streaming(self, *args: str, cwd: Path | None = None) -> int:
        self.calls.append(args)
        return self._result_for(args).returncode


class InMemoryGit:
    """VersionControl double over a plain directory.

    ``changes`` are the working-tree modifications ``stage_all`` picks up.
    Untracked files are whatever exists under ``root`` and is not in
    ``tracked``, so files written by a scripted agent show up like they
    would with real git.
    """

    def __init__(
        self,
        root: Path,
        changes: list[str] | None = None,
        is_repo: bool = True,
        worktree: bool = False,
        branch: str = "main",
        remotes: dict[str, str] | None = None,
        commit_returncode: int = 0,
        push_rejections: int = 0,
        push_returncode: int = 0,
    ):
        self.root = root
        self.changes = list(changes or [])
        self.tracked: set[str] = set()
        self.is_repo = is_repo
        self.worktree = worktree
        self.branch = branch
        self.remotes = dict(remotes or {})
        self.commit_returncode = commit_returncode
        self.push_rejections = push_rejections
        self.push_returncode = push_returncode
        self.staged: list[str] = []
        self.commits: list[str] = []
        self.pushes: list[tuple[str, str, bool]] = []
        self.pushed_commit_count = 0
        self.stage_calls = 0

    async def is_repository(self) -> bool:
        return self.is_repo

    async def is_worktree(self) -> bool:
        return self.worktree

    async def stage_all(self) -> None:
        self.stage_calls += 1
        for path in self.changes:
            if path not in self.staged:
                self.staged.append(path)
        self.changes = []

    async def staged_files(self) -> list[str]:
        return list(self.staged)

    async def staged_diff(self) -> CommandResult:
        body = "".join(f"diff --git a/{p} b/{p}\n" for p in self.staged)
        return CommandResult(returncode=0, stdout=body)

    async def status(self) -> CommandResult:
        return CommandResult(returncode=0, stdout="".join(f"A  {p}\n" for p in self.staged))

    async def untracked_files(self) -> set[str]:
        found = set()
        for path in self.root.rglob("*"):
            if not path.is_file():
                continue
            rel = path.relative_to(self.root).as_posix()
            if rel.startswith(".git/") or rel in self.tracked:
                continue
            found.add(rel)
        return found

    async def commit(self, message: str) -> CommandResult:
        if self.commit_returncode != 0:
            return CommandResult(returncode=self.commit_returncode, stderr="commit failed")
        self.commits.append(message)
        self.tracked.update(self.staged)
        self.staged = []
        return CommandResult(returncode=0)

    async def show_stat(self) -> str:
        if not self.commits:
            return ""
        return f"commit 0000000\n\n    {self.commits[-1]}\n"

    async def remote_url(self, name: str = "origin") -> str | None:
        return self.remotes.get(name)

    async def add_remote(self, name: str, url: str) -> CommandResult:
        if name in self.remotes:
            return CommandResult(returncode=3, stderr=f"error: remote {name} already exists.")
        self.remotes[name] = url
        return CommandResult(returncode=0)

    async def current_branch(self) -> str:
        return self.branch

    async def push(self, remote: str, branch: str, force: bool = False) -> CommandResult:
        self.pushes.append((remote, branch, force))
        if remote not in self.remotes:
            return CommandResult(returncode=128, stderr=f"fatal: '{remote}' does not appear to be a git repository")
        if self.push_returncode != 0:
            return CommandResult(returncode=self.push_returncode, stderr="push failed")
        if not force and self.push_rejections > 0:
            self.push_rejections -= 1
            return CommandResult(returncode=1, stderr="! [rejected] (fetch first)")
        self.pushed_commit_count = len(self.commits)
        return CommandResult(returncode=0)

    @property
    def unpushed_commit_count(self) -> int:
        return len(self.commits) - self.pushed_commit_count


class InMemoryHosting:
    """HostingService double. A successful create adds ``origin`` to ``git`` and pushes."""

    def __init__(
        self,
        git: InMemoryGit,
        installed: bool = True,
        authenticated: bool = True,
        create_succeeds: bool = True,
        user: str | None = "octocat",
    ):
        self._git = git
        self.installed = installed
        self.authenticated = authenticated
        self.create_succeeds = create_succeeds
        self.user = user
        self.created: list[str] = []
        self.create_attempts: list[str] = []

    def is_installed(self) -> bool:
        return self.installed

    async def is_authenticated(self) -> bool:
        return self.authenticated

    async def create_private_repo(self, name: str) -> bool:
        self.create_attempts.append(name)
        if not self.create_succeeds:
            return False
        self.created.append(name)
        self._git.remotes["origin"] = self.repo_url(self.user or "unknown", name)
        self._git.pushed_commit_count = len(self._git.commits)
        return True

    async def authenticated_user(self) -> str | None:
        return self.user

    def repo_url(self, owner: str, name: str) -> str:
        return f"https://github.com/{owner}/{name}.git"


@dataclass
class RecordingNotifier:
    notifications: list[tuple[str, str]] = field(default_factory=list)

    async def notify(self, title: str, body: str) -> None:
        self.notifications.append((title, body))
