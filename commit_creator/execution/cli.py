"""CLI entry point for the commit workflow.

Usage:
  commit-creator [--push | --no-push] [--dangerously-skip-security-check]
                 [--agent-backend {cli,sdk}] [--model NAME] [-v]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commit-creator",
        description=(
            "Stage all changes, run the project's quality gates, have Claude "
            "review the diff and write the message, then commit and push."
        ),
    )
    parser.add_argument(
        "--push", dest="push", action="store_true", default=True,
        help="Push after committing, creating the remote if needed (default)",
    )
    parser.add_argument(
        "--no-push", dest="push", action="store_false",
        help="Commit only; never push or create a remote",
    )
    parser.add_argument(
        "--dangerously-skip-security-check", action="store_true",
        help="Commit without the agent's security review",
    )
    parser.add_argument(
        "--agent-backend", choices=["cli", "sdk"], default=None,
        help="Run the agent through the claude CLI (default) or the claude-agent-sdk",
    )
    parser.add_argument("--model", default=None, help="Claude model (default: sonnet)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(level: str, verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            stream=sys.stderr,
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(stream=sys.stderr, level=level, format="%(message)s")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    from commit_creator.execution.config import PipelineConfig

    cwd = Path.cwd()
    try:
        config = PipelineConfig.from_env(
            cwd,
            should_push=args.push,
            skip_security_check=args.dangerously_skip_security_check,
            agent_backend=args.agent_backend,
            model=args.model,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(config.log_level, args.verbose)

    try:
        exit_code = asyncio.run(_run_command(config, cwd))
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    sys.exit(exit_code)


async def _run_command(config, cwd: Path) -> int:
    from commit_creator.execution.convenience import run_commit

    result = await run_commit(config, cwd)

    if not result.success:
        print(f"Commit run failed after {result.duration_seconds:.1f}s", file=sys.stderr)
        return result.exit_code

    if result.commit_message:
        print(result.commit_message)
    return result.exit_code


if __name__ == "__main__":
    main()
