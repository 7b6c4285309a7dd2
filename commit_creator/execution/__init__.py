from .commit_message import CommitMessageRules, CommitMessageStage
from .config import PipelineConfig
from .context import PipelineContext
from .convenience import create_default_context, create_executor, run_commit
from .environment import EnvironmentProbe
from .gates import GateKind, QualityGateRunner
from .publish import CommitPublisher
from .runner import CommitPipeline, RunResult
from .security import SecurityReviewStage
from .staging import ChangeStager
