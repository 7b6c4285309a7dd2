"""The explicit run context threaded through every stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from commit_creator.adapters.process import echo_to_stderr
from commit_creator.agents.execution.invoker import AgentInvoker
from commit_creator.agents.execution.protocol import AgentExecutor
from commit_creator.execution.config import PipelineConfig
from commit_creator.workflow.interface import (
    HostingService,
    Notifier,
    ProcessRunner,
    VerdictChannel,
    VersionControl,
)


@dataclass
class PipelineContext:
    config: PipelineConfig
    working_dir: Path
    processes: ProcessRunner
    git: VersionControl
    hosting: HostingService
    notifier: Notifier
    agent: AgentExecutor
    verdicts: VerdictChannel
    echo: Callable[[str], None] = field(default=echo_to_stderr)

    def invoker(self) -> AgentInvoker:
        return AgentInvoker(self.agent, self.git, self.working_dir, echo=self.echo)
