"""Quality gates: the project's own format, lint, type-check and test tooling.

Tooling is detected from manifest files in a fixed priority order and the
first match wins. Any failing task aborts the run, so a broken build is
never committed.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from commit_creator.workflow.exceptions import (
    FormatOrLintFailedError,
    InvalidManifestError,
    TestsFailedError,
)
from commit_creator.workflow.interface import ProcessRunner, VersionControl

logger = logging.getLogger(__name__)


class GateKind(Enum):
    FORMAT = "format"
    LINT = "lint"
    TYPE_CHECK = "type-check"
    TEST = "test"


# Canonical task ordering
GATE_ORDER: list[GateKind] = [
    GateKind.FORMAT,
    GateKind.LINT,
    GateKind.TYPE_CHECK,
    GateKind.TEST,
]

# Script / make target names accepted for each task, first match wins.
TASK_NAMES: dict[GateKind, tuple[str, ...]] = {
    GateKind.FORMAT: ("format",),
    GateKind.LINT: ("lint",),
    GateKind.TYPE_CHECK: ("typecheck", "type-check"),
    GateKind.TEST: ("test",),
}


@dataclass(frozen=True)
class GateTask:
    kind: GateKind
    command: tuple[str, ...]


class ProjectTooling(Protocol):
    """A manifest detector paired with the tasks it provides."""

    name: str
    manifest: str

    def detect(self, root: Path) -> bool: ...

    def tasks(self, root: Path) -> dict[GateKind, GateTask]: ...


class PackageJsonTooling:
    """npm-style ``scripts`` in package.json, run with pnpm."""

    name = "pnpm"
    manifest = "package.json"

    def detect(self, root: Path) -> bool:
        return (root / self.manifest).is_file()

    def tasks(self, root: Path) -> dict[GateKind, GateTask]:
        try:
            data = json.loads((root / self.manifest).read_text(encoding="utf-8"))
        except ValueError as e:
            raise InvalidManifestError(self.manifest, str(e)) from e
        scripts = data.get("scripts") if isinstance(data, dict) else None
        if not isinstance(scripts, dict):
            scripts = {}

        tasks = {}
        for kind, names in TASK_NAMES.items():
            for script in names:
                if script in scripts:
                    tasks[kind] = GateTask(kind, ("pnpm", "run", script))
                    break
        return tasks


class MakefileTooling:
    name = "make"
    manifest = "Makefile"

    def detect(self, root: Path) -> bool:
        return (root / self.manifest).is_file()

    def tasks(self, root: Path) -> dict[GateKind, GateTask]:
        content = (root / self.manifest).read_text(errors="replace")
        tasks = {}
        for kind, names in TASK_NAMES.items():
            for target in names:
                # "test:" is a rule, "test := x" is a variable
                if re.search(rf"^{re.escape(target)}\s*:(?!=)", content, re.MULTILINE):
                    tasks[kind] = GateTask(kind, ("make", target))
                    break
        return tasks


class PyprojectTooling:
    """Python tools declared in pyproject.toml, run through uv."""

    name = "uv"
    manifest = "pyproject.toml"

    COMMANDS: dict[GateKind, tuple[str, tuple[str, ...]]] = {
        GateKind.FORMAT: ("ruff", ("uv", "run", "ruff", "format", ".")),
        GateKind.LINT: ("ruff", ("uv", "run", "ruff", "check", ".")),
        GateKind.TYPE_CHECK: ("mypy", ("uv", "run", "mypy", ".")),
        GateKind.TEST: ("pytest", ("uv", "run", "pytest")),
    }

    def detect(self, root: Path) -> bool:
        return (root / self.manifest).is_file()

    def tasks(self, root: Path) -> dict[GateKind, GateTask]:
        try:
            data = tomllib.loads((root / self.manifest).read_text(encoding="utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise InvalidManifestError(self.manifest, str(e)) from e
        declared = _declared_tools(data)
        return {
            kind: GateTask(kind, command)
            for kind, (tool, command) in self.COMMANDS.items()
            if tool in declared
        }


def _requirement_name(requirement: str) -> str:
    match = re.match(r"\s*([A-Za-z0-9][A-Za-z0-9._-]*)", requirement)
    return match.group(1).lower().replace("_", "-") if match else ""


def _declared_tools(data: dict) -> set[str]:
    """Names configured under [tool] or listed as any kind of dependency."""
    names = {key.lower() for key in data.get("tool", {})}

    requirements: list = []
    project = data.get("project", {})
    requirements.extend(project.get("dependencies", []))
    for group in project.get("optional-dependencies", {}).values():
        requirements.extend(group)
    for group in data.get("dependency-groups", {}).values():
        requirements.extend(group)
    names.update(_requirement_name(r) for r in requirements if isinstance(r, str))

    poetry = data.get("tool", {}).get("poetry", {})
    names.update(key.lower() for key in poetry.get("dependencies", {}))
    names.update(key.lower() for key in poetry.get("dev-dependencies", {}))
    for group in poetry.get("group", {}).values():
        names.update(key.lower() for key in group.get("dependencies", {}))

    names.discard("")
    return names


def default_toolings() -> list[ProjectTooling]:
    """Detection order: package manifest, build file, alternate manifest."""
    return [PackageJsonTooling(), MakefileTooling(), PyprojectTooling()]


@dataclass
class GateReport:
    tooling: str | None = None
    ran: list[GateKind] = field(default_factory=list)
    missing: list[GateKind] = field(default_factory=list)


class QualityGateRunner:
    """Runs the detected tooling's tasks in order, failing on the first error."""

    def __init__(
        self,
        processes: ProcessRunner,
        git: VersionControl,
        working_dir: Path,
        toolings: list[ProjectTooling] | None = None,
    ) -> None:
        self._processes = processes
        self._git = git
        self._root = working_dir
        self._toolings = toolings if toolings is not None else default_toolings()

    def detect(self) -> ProjectTooling | None:
        for tooling in self._toolings:
            if tooling.detect(self._root):
                return tooling
        return None

    async def run(self) -> GateReport:
        tooling = self.detect()
        if tooling is None:
            logger.info("No project tooling found (package.json, Makefile or pyproject.toml)")
            return GateReport()

        report = GateReport(tooling=tooling.name)
        tasks = tooling.tasks(self._root)
        for kind in GATE_ORDER:
            task = tasks.get(kind)
            if task is None:
                logger.info("No %s task found in %s", kind.value, tooling.manifest)
                report.missing.append(kind)
                continue
            await self._run_task(task)
            report.ran.append(kind)
            if kind is GateKind.FORMAT:
                # Formatter edits land in the commit; later task output does not.
                await self._git.stage_all()
        return report

    async def _run_task(self, task: GateTask) -> None:
        logger.info("Running %s: %s", task.kind.value, " ".join(task.command))
        returncode = await self._processes.run_streaming(*task.command, cwd=self._root)
        if returncode == 0:
            return
        if task.kind is GateKind.TEST:
            raise TestsFailedError(task.command, returncode)
        raise FormatOrLintFailedError(task.kind.value, task.command, returncode)
