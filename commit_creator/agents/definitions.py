"""Prompt definitions for the security review and commit message agents."""

from __future__ import annotations

from commit_creator.agents.context import (
    DIFF_COMMAND,
    STATUS_COMMAND,
    TREE_COMMAND,
    RepositoryContext,
)
from commit_creator.workflow.models import FAILED_SENTINEL, SUCCEEDED_SENTINEL


def _command_block(description: str, command: str, output: str) -> str:
    return (
        "<Command>\n"
        f"<CommandDescription>\n{description}\n</CommandDescription>\n"
        f"<CommandInput>\n{command}\n</CommandInput>\n"
        f"<CommandOutput>\n{output}\n</CommandOutput>\n"
        "</Command>"
    )


def render_context(context: RepositoryContext) -> str:
    blocks = [
        _command_block("A tree of all repository files and directories", TREE_COMMAND, context.tree),
        _command_block("All staged changes", DIFF_COMMAND, context.diff),
        _command_block("Status of repo changes", STATUS_COMMAND, context.status),
    ]
    return "<Context>\n" + "\n\n".join(blocks) + "\n</Context>"


SECURITY_CHECK_INSTRUCTIONS = f"""\
<Instructions>
All changes are in the working tree and all context needed for the review is in the conversation.
Follow these instructions step-by-step:
- Perform a safety and security check of the current repo changes
- Look for the following unsafe scenarios:
  - Suspicious files or changes
  - Any credentials are present
  - Files are committed that should be ignored
  - Binaries are committed
  - Secrets accidentally embedded in code (e.g., API keys, tokens)
  - Executable scripts without shebang or unexpected permissions
  - Unexpected changes to configuration or dependency files (e.g., package-lock.json, requirements.txt)
- When complete save a file with the contents of the security check
  - If no unsafe scenarios are present, save the summary as ./{SUCCEEDED_SENTINEL}
  - If unsafe scenarios are present, save the summary as ./{FAILED_SENTINEL}
- Save exactly one of these two files and do not create any other file
</Instructions>"""


COMMIT_MESSAGE_RULES = """\
<Rules>
- When writing a commit message summarize the changes
  - Explain _what_ changed and what the effects on users will be
  - **Never** try to explain _why_ the changes were made unless it is explicit in the context
- Write the message as the human author of the changes
  - Never mention an AI, an assistant, a language model or the tool that wrote the message
  - Never add co-author, attribution or "generated by" lines
</Rules>"""


COMMIT_MESSAGE_INSTRUCTIONS = """\
<Instructions>
All changes are in the working tree and all context to create a commit message is in the conversation. \
Analyze the changes and respond with ONLY the commit message text - no explanations, \
no additional commentary, just the commit message itself.
</Instructions>"""


def security_check_prompt(context: RepositoryContext) -> str:
    return "\n\n".join([
        "<Role>\nYou are an engineer who is an expert at performing software security checks.\n</Role>",
        render_context(context),
        SECURITY_CHECK_INSTRUCTIONS,
    ])


def commit_message_prompt(context: RepositoryContext) -> str:
    return "\n\n".join([
        "<Role>\nYou are an engineer who is an expert at git and writing commit messages. "
        "You are a human making a commit for code written by you, a human.\n</Role>",
        COMMIT_MESSAGE_RULES,
        render_context(context),
        COMMIT_MESSAGE_INSTRUCTIONS,
    ])
