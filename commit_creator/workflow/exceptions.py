"""Workflow exception types.

Every failure that aborts a run derives from ``CommitCreatorError`` so the
pipeline has a single place to catch, report and notify.
"""


class CommitCreatorError(Exception):
    """Base class for errors that abort the commit workflow."""


class MissingDependencyError(CommitCreatorError):
    """Raised when one or more required executables are not installed."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        lines = "\n".join(f"  - {item}" for item in missing)
        super().__init__(f"Required executables are missing:\n{lines}")


class NotARepositoryError(CommitCreatorError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Not in a git repository: {path}")


class GitCommandError(CommitCreatorError):
    """Raised when a git command the workflow depends on fails."""

    def __init__(self, args: tuple[str, ...], returncode: int, output: str = ""):
        self.args_ = args
        self.returncode = returncode
        self.output = output
        detail = f": {output.strip()}" if output.strip() else ""
        super().__init__(
            f"git {' '.join(args)} failed (exit {returncode}){detail}"
        )


class FormatOrLintFailedError(CommitCreatorError):
    def __init__(self, task: str, command: tuple[str, ...], returncode: int):
        self.task = task
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Code {task} failed: {' '.join(command)} (exit {returncode})"
        )


class TestsFailedError(CommitCreatorError):
    __test__ = False

    def __init__(self, command: tuple[str, ...], returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Tests failed: {' '.join(command)} (exit {returncode})")


class AgentError(CommitCreatorError):
    """Base class for failures of a single agent invocation."""


class AgentProcessFailedError(AgentError):
    def __init__(self, exit_code: int | None, detail: str = ""):
        self.exit_code = exit_code
        self.detail = detail
        message = f"Claude command failed with exit code {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AgentReportedFailureError(AgentError):
    def __init__(self, subtype: str | None):
        self.subtype = subtype
        super().__init__(f"Claude returned an error result (subtype: {subtype})")


class MalformedAgentResponseError(AgentError):
    def __init__(self, last_line: str | None):
        self.last_line = last_line
        super().__init__("Invalid response format from Claude")


class SecurityCheckFailedError(CommitCreatorError):
    def __init__(self, report: str):
        self.report = report
        super().__init__(
            "Security check failed! Security issues found:\n" + report.strip()
        )


class SecurityCheckIncompleteError(CommitCreatorError):
    def __init__(self, expected: str):
        self.expected = expected
        super().__init__(
            f"Security check did not complete successfully! Missing ./{expected} file"
        )


class EmptyOrRejectedCommitMessageError(CommitCreatorError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class CommitFailedError(CommitCreatorError):
    def __init__(self, returncode: int, output: str = ""):
        self.returncode = returncode
        self.output = output
        super().__init__(f"Failed to create commit! (exit {returncode})")


class PublishFailedError(CommitCreatorError):
    """Raised when ensuring the remote or pushing fails.

    A local commit created earlier in the run is left in place.
    """

    def __init__(self, reason: str, commit_created: bool = False):
        self.reason = reason
        self.commit_created = commit_created
        message = reason
        if commit_created:
            message = f"{reason}\nCommit was created successfully but not pushed."
        super().__init__(message)


class InvalidManifestError(CommitCreatorError):
    """Raised when a project manifest used to detect tooling cannot be parsed."""

    def __init__(self, manifest: str, detail: str):
        self.manifest = manifest
        self.detail = detail
        super().__init__(f"Could not parse {manifest}: {detail}")
