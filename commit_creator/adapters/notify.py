"""Desktop notifications via ``notify-send``."""

from __future__ import annotations

import logging

from ..workflow.interface import ProcessRunner

logger = logging.getLogger(__name__)


class DesktopNotifier:
    """Best-effort notifier. Never raises and never changes the run's outcome."""

    def __init__(self, runner: ProcessRunner, urgency: str = "critical"):
        self._runner = runner
        self._urgency = urgency

    async def notify(self, title: str, body: str) -> None:
        if self._runner.which("notify-send") is None:
            logger.debug("notify-send not installed; skipping notification")
            return
        result = await self._runner.run(
            "notify-send", title, body, f"--urgency={self._urgency}"
        )
        if not result.ok:
            logger.debug("notify-send failed (exit %s): %s", result.returncode, result.output.strip())
