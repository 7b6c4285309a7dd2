"""VerdictChannel backed by sentinel files in the working directory."""

from __future__ import annotations

from pathlib import Path

from ..workflow.models import (
    FAILED_SENTINEL,
    SUCCEEDED_SENTINEL,
    SecurityVerdict,
    VerdictOutcome,
)


class SentinelFiles:
    """The agent writes exactly one of two marker files; this reads them."""

    def __init__(self, working_dir: Path):
        self.succeeded_path = working_dir / SUCCEEDED_SENTINEL
        self.failed_path = working_dir / FAILED_SENTINEL

    def clear(self) -> None:
        self.succeeded_path.unlink(missing_ok=True)
        self.failed_path.unlink(missing_ok=True)

    def read(self) -> SecurityVerdict:
        failed = self.failed_path.is_file()
        succeeded = self.succeeded_path.is_file()
        if failed and succeeded:
            return SecurityVerdict(VerdictOutcome.CONFLICTING, self._text(self.failed_path))
        if failed:
            return SecurityVerdict(VerdictOutcome.FAILED, self._text(self.failed_path))
        if succeeded:
            return SecurityVerdict(VerdictOutcome.PASSED, self._text(self.succeeded_path))
        return SecurityVerdict(VerdictOutcome.MISSING)

    def consume(self) -> SecurityVerdict:
        try:
            return self.read()
        finally:
            self.clear()

    @staticmethod
    def _text(path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")
