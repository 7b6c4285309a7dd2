"""Agent invocation infrastructure."""

from commit_creator.agents.execution.claude_cli import ClaudeCliExecutor
from commit_creator.agents.execution.events import interpret_last_line, last_line, parse_event
from commit_creator.agents.execution.invoker import AgentInvoker
from commit_creator.agents.execution.mocks import ScriptedAgentExecutor
from commit_creator.agents.execution.protocol import AgentExecutor
from commit_creator.agents.execution.types import AgentEvent, AgentRequest

__all__ = [
    "AgentEvent",
    "AgentExecutor",
    "AgentInvoker",
    "AgentRequest",
    "ClaudeCliExecutor",
    "ScriptedAgentExecutor",
    "interpret_last_line",
    "last_line",
    "parse_event",
]
