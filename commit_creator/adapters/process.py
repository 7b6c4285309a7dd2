"""asyncio-backed process runner."""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
from pathlib import Path
from typing import Callable

from ..workflow.models import CommandResult

logger = logging.getLogger(__name__)

# Exit status a shell reports for a command it cannot find.
COMMAND_NOT_FOUND = 127


def echo_to_stderr(line: str) -> None:
    print(line, file=sys.stderr, flush=True)


class SubprocessRunner:
    """ProcessRunner that spawns real subprocesses."""

    def __init__(self, echo: Callable[[str], None] | None = None):
        self._echo = echo or echo_to_stderr

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    async def run(
        self, *args: str, cwd: Path | None = None, input: str | None = None
    ) -> CommandResult:
        logger.debug("run: %s", " ".join(args))
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                cwd=cwd,
                stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            return CommandResult(returncode=COMMAND_NOT_FOUND, stderr=f"{args[0]}: {e}")
        stdout, stderr = await proc.communicate(
            input=input.encode() if input is not None else None
        )
        return CommandResult(
            returncode=proc.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )

    async def run_streaming(self, *args: str, cwd: Path | None = None) -> int:
        logger.debug("run (streaming): %s", " ".join(args))
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            self._echo(f"{args[0]}: {e}")
            return COMMAND_NOT_FOUND
        async for raw in proc.stdout:
            self._echo(raw.decode(errors="replace").rstrip("\n"))
        return await proc.wait()
