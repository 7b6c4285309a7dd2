"""Parsing and interpretation of the agent's JSON-lines output stream.

The stream is a trace of incremental actions. Only its final line carries
the authoritative outcome, so interpretation looks at nothing else: an
error-shaped line earlier in the stream does not end the run, the agent may
still recover and finish with a success result.
"""

from __future__ import annotations

import json
from typing import Iterable

from commit_creator.agents.execution.types import AgentEvent, AgentRequest
from commit_creator.workflow.exceptions import (
    AgentReportedFailureError,
    MalformedAgentResponseError,
)


def parse_event(line: str) -> AgentEvent | None:
    """Parse one output line. Returns None for anything but a JSON object."""
    try:
        data = json.loads(line)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    result = data.get("result")
    return AgentEvent(
        type=data.get("type"),
        subtype=data.get("subtype"),
        result=result if isinstance(result, str) else None,
        raw=data,
    )


def last_line(lines: Iterable[str]) -> str | None:
    """Fold a stream down to its last non-blank line."""
    last = None
    for line in lines:
        if line.strip():
            last = line
    return last


def interpret_last_line(final_line: str | None, request: AgentRequest) -> str | None:
    """Apply the request's validation and capture rules to the final line.

    Returns the captured result text ("" when the stream did not end in a
    success result) in capture mode, otherwise None.
    """
    event = parse_event(final_line) if final_line is not None else None
    succeeded = event is not None and event.is_success

    if request.validate_result and not succeeded:
        if event is not None and event.is_result:
            raise AgentReportedFailureError(event.subtype)
        raise MalformedAgentResponseError(final_line)

    if request.capture_result_text:
        if not succeeded:
            return ""
        return event.result or ""
    return None


def format_for_display(line: str) -> str:
    """Pretty-print JSON lines; anything else is shown verbatim."""
    try:
        data = json.loads(line)
    except ValueError:
        return line
    return json.dumps(data, indent=2, ensure_ascii=False)
