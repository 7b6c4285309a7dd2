from .context import RepositoryContext, gather_context
from .definitions import commit_message_prompt, security_check_prompt

__all__ = [
    "RepositoryContext",
    "commit_message_prompt",
    "gather_context",
    "security_check_prompt",
]
