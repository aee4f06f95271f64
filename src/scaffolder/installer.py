"""External process orchestration: package manager and git.

Each command runs to completion before the next starts, with inherited
stdout/stderr so install progress streams to the terminal.  Failures are
reported and returned, never raised: files already written stay on disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.config import PackageManager
from src.utils import format_command, print_step, print_warning, run_command


@dataclass
class StepResult:
    """Outcome of one or more external commands."""

    ok: bool = True
    failed_command: str | None = None
    messages: list[str] = field(default_factory=list)


async def _run_sequence(
    commands: list[list[str]],
    cwd: Path,
    retry_hint: str,
    capture: bool = False,
) -> StepResult:
    for cmd in commands:
        print_step(format_command(cmd))
        try:
            returncode, _, stderr = await run_command(cmd, cwd=cwd, capture=capture)
        except FileNotFoundError:
            returncode, stderr = 127, f"{cmd[0]}: command not found"
        if returncode != 0:
            message = (
                f"Command failed ({returncode}): {format_command(cmd)}. {retry_hint}"
            )
            if stderr:
                message = f"{message}\n{stderr}"
            print_warning(message)
            return StepResult(ok=False, failed_command=format_command(cmd), messages=[message])
    return StepResult()


class PackageInstaller:
    """Installs runtime then dev dependencies with the selected manager."""

    def __init__(self, manager: PackageManager) -> None:
        self.manager = manager

    def commands(self, runtime: list[str], dev: list[str]) -> list[list[str]]:
        """The install commands, runtime first.  Empty groups are skipped."""
        commands: list[list[str]] = []
        if runtime:
            commands.append(self.manager.add_command(runtime))
        if dev:
            commands.append(self.manager.add_command(dev, dev=True))
        return commands

    async def install(self, project_root: Path, runtime: list[str], dev: list[str]) -> StepResult:
        hint = (
            f"You may need to run `{self.manager.value} install` manually inside "
            f"{project_root.name}."
        )
        return await _run_sequence(self.commands(runtime, dev), project_root, hint)


class GitInitializer:
    """Initialises a repository and records an initial commit."""

    COMMIT_MESSAGE = "Initial commit"

    def commands(self) -> list[list[str]]:
        return [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", self.COMMIT_MESSAGE],
        ]

    async def initialize(self, project_root: Path) -> StepResult:
        hint = "Run `git init` and commit manually if you want version control."
        return await _run_sequence(self.commands(), project_root, hint, capture=True)
