"""Desktop notification text for each terminal outcome."""

from __future__ import annotations

from typing import TYPE_CHECKING

from commit_creator.workflow.models import PublishStatus, RunOutcome

if TYPE_CHECKING:
    from commit_creator.execution.runner import RunResult

SUCCESS_TITLE = "✅ Commit Created"
SYNCED_TITLE = "✅ Repository Synced"
UNPUSHED_TITLE = "⚠️ Commit Created, Not Pushed"
FAILURE_TITLE = "❌ Error: Commit Not Created"

PUBLISH_NOTES: dict[PublishStatus, str] = {
    PublishStatus.PUSH_SKIPPED: "Push skipped (--no-push)",
    PublishStatus.WORKTREE_SKIPPED: "Push skipped (git worktree)",
}


def describe(result: RunResult, project_name: str) -> tuple[str, str]:
    """Title and body of the notification for ``result``."""
    lines = [f"Project: {project_name}"]

    if result.outcome is RunOutcome.FAILED:
        lines.append(str(result.error) if result.error else "Unknown error")
        title = UNPUSHED_TITLE if result.committed else FAILURE_TITLE
        return title, "\n".join(lines)

    if result.outcome is RunOutcome.COMMITTED:
        title = SUCCESS_TITLE
        lines.append(result.subject)
    else:
        title = SYNCED_TITLE
        if result.publish is PublishStatus.PUSH_SKIPPED:
            lines.append("No new changes")
        else:
            lines.append("Repository synced with git repo (no new changes)")

    note = PUBLISH_NOTES.get(result.publish)
    if note:
        lines.append(note)
    return title, "\n".join(lines)
