"""Claude CLI executor: pipes the prompt to ``claude --print`` and streams JSON lines."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import AsyncIterator

from commit_creator.agents.execution.protocol import ALLOWED_TOOLS, DISALLOWED_TOOLS
from commit_creator.workflow.exceptions import AgentProcessFailedError

logger = logging.getLogger(__name__)

# stream-json lines embed whole tool inputs and results, well past asyncio's
# 64 KiB default line limit.
STREAM_LINE_LIMIT = 64 * 1024 * 1024


class ClaudeCliExecutor:
    """Runs the claude executable as a subprocess."""

    name: str = "cli"

    def __init__(self, executable: str | Path, model: str = "sonnet") -> None:
        self._executable = str(executable)
        self._model = model

    def build_command(self) -> list[str]:
        command = [
            self._executable,
            "--print",
            "--verbose",
            "--output-format", "stream-json",
        ]
        for tool in ALLOWED_TOOLS:
            command.extend(["--allowedTools", tool])
        for tool in DISALLOWED_TOOLS:
            command.extend(["--disallowedTools", tool])
        command.extend(["--model", self._model])
        return command

    async def stream(self, prompt: str, working_dir: Path) -> AsyncIterator[str]:
        # Allow nested invocation from within a Claude Code session.
        env = {k: v for k, v in os.environ.items() if k != "CLAUDECODE"}
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.build_command(),
                cwd=working_dir,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                env=env,
                limit=STREAM_LINE_LIMIT,
            )
        except OSError as e:
            raise AgentProcessFailedError(None, str(e)) from e

        feeder = asyncio.create_task(self._feed(proc, prompt))
        finished = False
        try:
            async for raw in proc.stdout:
                yield raw.decode(errors="replace").rstrip("\r\n")
            await feeder
            finished = True
        finally:
            if not finished:
                feeder.cancel()
                if proc.returncode is None:
                    proc.kill()
                await proc.wait()

        returncode = await proc.wait()
        if returncode != 0:
            raise AgentProcessFailedError(returncode)

    @staticmethod
    async def _feed(proc: asyncio.subprocess.Process, prompt: str) -> None:
        try:
            proc.stdin.write(prompt.encode())
            await proc.stdin.drain()
            proc.stdin.close()
            await proc.stdin.wait_closed()
        except (BrokenPipeError, ConnectionResetError):
            # The exit status reports why the agent stopped reading.
            logger.debug("agent closed stdin before the prompt was fully written")
