"""HostingService backed by the GitHub CLI (``gh``)."""

from __future__ import annotations

from pathlib import Path

from ..workflow.interface import ProcessRunner


class GitHubCli:
    def __init__(self, runner: ProcessRunner, working_dir: Path, host: str = "github.com"):
        self._runner = runner
        self._cwd = working_dir
        self._host = host

    def is_installed(self) -> bool:
        return self._runner.which("gh") is not None

    async def is_authenticated(self) -> bool:
        return (await self._runner.run("gh", "auth", "status", cwd=self._cwd)).ok

    async def create_private_repo(self, name: str) -> bool:
        """Create ``name`` as a private repo, add it as origin and push."""
        result = await self._runner.run(
            "gh", "repo", "create", name,
            "--private", "--source=.", "--remote=origin", "--push",
            cwd=self._cwd,
        )
        return result.ok

    async def authenticated_user(self) -> str | None:
        result = await self._runner.run("gh", "api", "user", "--jq", ".login", cwd=self._cwd)
        login = result.stdout.strip()
        if not result.ok or not login:
            return None
        return login

    def repo_url(self, owner: str, name: str) -> str:
        return f"https://{self._host}/{owner}/{name}.git"
