"""Protocol definition for agent backends."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Protocol, runtime_checkable

# The agent may only write files (the sentinel reports). Everything it needs
# to know is embedded in the prompt.
ALLOWED_TOOLS = ["Write"]
DISALLOWED_TOOLS = [
    "Read",
    "Bash",
    "Task",
    "Glob",
    "Grep",
    "LS",
    "Edit",
    "MultiEdit",
    "NotebookRead",
    "NotebookEdit",
    "WebFetch",
    "TodoRead",
    "TodoWrite",
    "WebSearch",
]


@runtime_checkable
class AgentExecutor(Protocol):
    """Runs one prompt and yields the agent's raw output lines as they arrive.

    Raises AgentProcessFailedError when the agent process exits non-zero.
    """

    name: str

    def stream(self, prompt: str, working_dir: Path) -> AsyncIterator[str]: ...
