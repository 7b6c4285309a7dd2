from .git import GitBackend
from .github import GitHubCli
from .memory import InMemoryGit, InMemoryHosting, RecordingNotifier, ScriptedProcessRunner
from .notify import DesktopNotifier
from .process import SubprocessRunner
from .sentinel import SentinelFiles

__all__ = [
    "DesktopNotifier",
    "GitBackend",
    "GitHubCli",
    "InMemoryGit",
    "InMemoryHosting",
    "RecordingNotifier",
    "ScriptedProcessRunner",
    "SentinelFiles",
    "SubprocessRunner",
]
