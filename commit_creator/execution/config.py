"""Execution configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

AGENT_BACKENDS = ("cli", "sdk")
DEFAULT_MODEL = "sonnet"
# Rejected anywhere in a drafted commit message (case-sensitive substring).
DEFAULT_FORBIDDEN_WORD = "Claude"
REQUIRED_EXECUTABLES: dict[str, str] = {
    "git": "Git is required for version control operations",
    "tree": "tree is required for displaying project structure",
}


def default_agent_executable() -> str:
    return str(Path.home() / ".claude" / "local" / "claude")


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for one commit run. Built once at startup."""

    should_push: bool = True
    skip_security_check: bool = False
    project_name: str = ""
    agent_executable: str = "claude"
    agent_backend: str = "cli"
    model: str = DEFAULT_MODEL
    forbidden_word: str | None = DEFAULT_FORBIDDEN_WORD
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.agent_backend not in AGENT_BACKENDS:
            raise ValueError(
                f"Unknown agent backend {self.agent_backend!r} "
                f"(expected one of: {', '.join(AGENT_BACKENDS)})"
            )
        if self.log_level not in logging.getLevelNamesMapping():
            raise ValueError(
                f"Unknown log level {self.log_level!r} "
                "(expected one of: DEBUG, INFO, WARNING, ERROR, CRITICAL)"
            )

    @classmethod
    def from_env(
        cls,
        working_dir: Path,
        *,
        should_push: bool = True,
        skip_security_check: bool = False,
        agent_backend: str | None = None,
        model: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> PipelineConfig:
        """Environment settings, overridden by explicit (command-line) values."""
        env = os.environ if environ is None else environ

        forbidden_word: str | None = DEFAULT_FORBIDDEN_WORD
        if "COMMIT_CREATOR_FORBIDDEN_WORD" in env:
            forbidden_word = env["COMMIT_CREATOR_FORBIDDEN_WORD"].strip() or None

        return cls(
            should_push=should_push,
            skip_security_check=skip_security_check,
            project_name=working_dir.resolve().name,
            agent_executable=env.get("CLAUDE_EXECUTABLE") or default_agent_executable(),
            agent_backend=(
                agent_backend
                or env.get("COMMIT_CREATOR_AGENT_BACKEND", "").strip().lower()
                or "cli"
            ),
            model=model or env.get("COMMIT_CREATOR_MODEL") or DEFAULT_MODEL,
            forbidden_word=forbidden_word,
            log_level=(env.get("COMMIT_CREATOR_LOG_LEVEL") or "INFO").upper(),
        )
