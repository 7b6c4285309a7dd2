from .exceptions import (
    AgentError,
    AgentProcessFailedError,
    AgentReportedFailureError,
    CommitCreatorError,
    CommitFailedError,
    EmptyOrRejectedCommitMessageError,
    FormatOrLintFailedError,
    GitCommandError,
    InvalidManifestError,
    MalformedAgentResponseError,
    MissingDependencyError,
    NotARepositoryError,
    PublishFailedError,
    SecurityCheckFailedError,
    SecurityCheckIncompleteError,
    TestsFailedError,
)
from .interface import HostingService, Notifier, ProcessRunner, VerdictChannel, VersionControl
from .models import (
    FAILED_SENTINEL,
    SENTINEL_NAMES,
    SUCCEEDED_SENTINEL,
    CommandResult,
    PublishStatus,
    RunOutcome,
    SecurityVerdict,
    VerdictOutcome,
)

__all__ = [
    "AgentError",
    "AgentProcessFailedError",
    "AgentReportedFailureError",
    "CommandResult",
    "CommitCreatorError",
    "CommitFailedError",
    "EmptyOrRejectedCommitMessageError",
    "FAILED_SENTINEL",
    "FormatOrLintFailedError",
    "GitCommandError",
    "HostingService",
    "InvalidManifestError",
    "MalformedAgentResponseError",
    "MissingDependencyError",
    "NotARepositoryError",
    "Notifier",
    "ProcessRunner",
    "PublishFailedError",
    "PublishStatus",
    "RunOutcome",
    "SENTINEL_NAMES",
    "SUCCEEDED_SENTINEL",
    "SecurityCheckFailedError",
    "SecurityCheckIncompleteError",
    "SecurityVerdict",
    "TestsFailedError",
    "VerdictChannel",
    "VerdictOutcome",
    "VersionControl",
]
