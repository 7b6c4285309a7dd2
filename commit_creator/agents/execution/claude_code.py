"""Executor that runs prompts through the claude-agent-sdk."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import AsyncIterator

# Allow nested invocation from within a Claude Code session.
# The SDK spawns claude CLI which checks for this env var.
os.environ.pop("CLAUDECODE", None)

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    CLINotFoundError,
    ProcessError,
    ResultMessage,
    TextBlock,
    ToolUseBlock,
    query,
)

from commit_creator.agents.execution.protocol import ALLOWED_TOOLS, DISALLOWED_TOOLS
from commit_creator.workflow.exceptions import AgentProcessFailedError, MissingDependencyError


class ClaudeCodeExecutor:
    """Executes prompts via the claude-agent-sdk.

    The SDK handles subprocess management and message parsing. Each message
    is rendered back into a stream-json style line so callers interpret SDK
    and CLI output with the same last-line rule.
    """

    name: str = "sdk"

    def __init__(
        self,
        executable: str | Path | None = None,
        model: str = "sonnet",
        permission_mode: str = "acceptEdits",
    ) -> None:
        self._executable = executable
        self._model = model
        self._permission_mode = permission_mode

    def build_options(self, working_dir: Path) -> ClaudeAgentOptions:
        return ClaudeAgentOptions(
            model=self._model,
            cwd=working_dir,
            allowed_tools=list(ALLOWED_TOOLS),
            disallowed_tools=list(DISALLOWED_TOOLS),
            permission_mode=self._permission_mode,
            cli_path=self._executable,
        )

    async def stream(self, prompt: str, working_dir: Path) -> AsyncIterator[str]:
        options = self.build_options(working_dir)
        try:
            async for message in query(prompt=prompt, options=options):
                yield json.dumps(self._to_event(message))
        except CLINotFoundError as e:
            raise MissingDependencyError([f"claude: {e}"]) from e
        except ProcessError as e:
            raise AgentProcessFailedError(e.exit_code, e.stderr or "") from e

    @staticmethod
    def _to_event(message) -> dict:
        """Render an SDK message as the equivalent stream-json event."""
        if isinstance(message, ResultMessage):
            return {
                "type": "result",
                "subtype": message.subtype,
                "is_error": message.is_error,
                "num_turns": message.num_turns,
                "result": message.result,
            }
        if isinstance(message, AssistantMessage):
            content = []
            for block in message.content:
                if isinstance(block, TextBlock):
                    content.append({"type": "text", "text": block.text})
                elif isinstance(block, ToolUseBlock):
                    content.append({"type": "tool_use", "name": block.name, "input": block.input})
            return {"type": "assistant", "content": content}
        return {"type": type(message).__name__.removesuffix("Message").lower()}
