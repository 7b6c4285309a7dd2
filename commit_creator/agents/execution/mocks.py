"""Scripted agent backend for testing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import AsyncIterator

from commit_creator.workflow.exceptions import AgentProcessFailedError


def result_line(result: str | None = "", subtype: str = "success") -> str:
    """A stream-json ``result`` event line."""
    return json.dumps({"type": "result", "subtype": subtype, "is_error": subtype != "success", "result": result})


def assistant_line(text: str) -> str:
    return json.dumps({"type": "assistant", "message": {"content": [{"type": "text", "text": text}]}})


class ScriptedAgentExecutor:
    """Agent double that replays canned output for each call.

    Each script is a dict with optional keys:
      lines: output lines to yield
      files: {relative path: content} written into the working dir first
      exit_code: non-zero raises AgentProcessFailedError after the lines
    Calls beyond the last script reuse the last one.
    """

    name: str = "scripted"

    def __init__(self, *scripts: dict) -> None:
        self._scripts = list(scripts) or [{"lines": [result_line()]}]
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def stream(self, prompt: str, working_dir: Path) -> AsyncIterator[str]:
        index = min(len(self.prompts), len(self._scripts) - 1)
        script = self._scripts[index]
        self.prompts.append(prompt)

        for rel, content in script.get("files", {}).items():
            path = working_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)

        for line in script.get("lines", []):
            yield line

        exit_code = script.get("exit_code", 0)
        if exit_code != 0:
            raise AgentProcessFailedError(exit_code)
