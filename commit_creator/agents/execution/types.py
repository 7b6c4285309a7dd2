"""Data types for agent invocation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AgentRequest:
    """One call to the external agent.

    validate_result: the stream must end in a ``result``/``success`` event.
    capture_result_text: don't echo the stream; return the final result text.
    """

    prompt: str
    validate_result: bool = False
    capture_result_text: bool = False


@dataclass
class AgentEvent:
    type: str | None
    subtype: str | None = None
    result: str | None = None
    raw: dict = field(default_factory=dict)

    @property
    def is_result(self) -> bool:
        return self.type == "result"

    @property
    def is_success(self) -> bool:
        return self.is_result and self.subtype == "success"
