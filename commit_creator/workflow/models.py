"""Domain models for the commit workflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SUCCEEDED_SENTINEL = "SUCCEEDED-SECURITY-CHECK.txt"
FAILED_SENTINEL = "FAILED-SECURITY-CHECK.txt"
SENTINEL_NAMES: frozenset[str] = frozenset({SUCCEEDED_SENTINEL, FAILED_SENTINEL})


class VerdictOutcome(Enum):
    PASSED = "passed"
    FAILED = "failed"
    CONFLICTING = "conflicting"
    MISSING = "missing"


class RunOutcome(Enum):
    COMMITTED = "committed"
    SYNCED = "synced"
    FAILED = "failed"


class PublishStatus(Enum):
    PUSHED = "pushed"
    REMOTE_CREATED = "remote_created"
    PUSH_SKIPPED = "push_skipped"
    WORKTREE_SKIPPED = "worktree_skipped"


@dataclass(frozen=True)
class SecurityVerdict:
    """What the agent left behind in the sentinel files.

    ``report`` is the failed report when one exists, otherwise the succeeded
    report, otherwise empty.
    """

    outcome: VerdictOutcome
    report: str = ""

    @property
    def passed(self) -> bool:
        return self.outcome is VerdictOutcome.PASSED


@dataclass
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """stdout and stderr combined, like ``2>&1`` in a shell."""
        return "".join(part for part in (self.stdout, self.stderr) if part)
