"""Commit pipeline: one end-to-end commit run."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from commit_creator.execution.commit_message import CommitMessageStage
from commit_creator.execution.context import PipelineContext
from commit_creator.execution.environment import EnvironmentProbe
from commit_creator.execution.gates import QualityGateRunner
from commit_creator.execution.notifications import describe
from commit_creator.execution.publish import CommitPublisher
from commit_creator.execution.security import SKIP_WARNING, SecurityReviewStage
from commit_creator.execution.staging import ChangeStager
from commit_creator.workflow.exceptions import CommitCreatorError
from commit_creator.workflow.models import PublishStatus, RunOutcome

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    outcome: RunOutcome
    publish: PublishStatus | None = None
    commit_message: str | None = None
    committed: bool = False
    error: CommitCreatorError | None = None
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.outcome is not RunOutcome.FAILED

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @property
    def subject(self) -> str:
        if not self.commit_message:
            return ""
        return self.commit_message.splitlines()[0]


class CommitPipeline:
    """Environment → stage → quality gates → security review → commit
    message → commit → publish, with one failure handler for all of it.

    The sentinel files are removed when the run ends, whichever way it ends,
    and exactly one notification is sent.
    """

    def __init__(self, ctx: PipelineContext) -> None:
        self._ctx = ctx
        self._publisher = CommitPublisher(ctx)
        self._commit_message: str | None = None
        self._committed = False

    async def run(self) -> RunResult:
        start_time = time.monotonic()
        try:
            result = await self._execute()
        except CommitCreatorError as e:
            result = self._failed(e)
        finally:
            self._ctx.verdicts.clear()

        result.duration_seconds = time.monotonic() - start_time
        title, body = describe(result, self._ctx.config.project_name)
        await self._ctx.notifier.notify(title, body)
        return result

    async def _execute(self) -> RunResult:
        ctx = self._ctx
        await EnvironmentProbe(ctx).verify()
        # Stale reports from an interrupted run must not be staged or trusted.
        ctx.verdicts.clear()

        if not await ChangeStager(ctx.git).stage():
            logger.info("No changes to commit. Ensuring repository is pushed to git repo...")
            publish = await self._publisher.publish(committed=False)
            return RunResult(outcome=RunOutcome.SYNCED, publish=publish)

        await QualityGateRunner(ctx.processes, ctx.git, ctx.working_dir).run()

        if ctx.config.skip_security_check:
            logger.warning(SKIP_WARNING)
        else:
            await SecurityReviewStage(ctx).run()

        self._commit_message = await CommitMessageStage(ctx).run()
        await self._publisher.commit(self._commit_message)
        self._committed = True

        publish = await self._publisher.publish(committed=True)
        return RunResult(
            outcome=RunOutcome.COMMITTED,
            publish=publish,
            commit_message=self._commit_message,
            committed=True,
        )

    def _failed(self, error: CommitCreatorError) -> RunResult:
        logger.error("Error: %s", error)
        return RunResult(
            outcome=RunOutcome.FAILED,
            commit_message=self._commit_message,
            committed=self._committed,
            error=error,
        )
