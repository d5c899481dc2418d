"""External tool invocations for each check and its autofix."""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from ..cli.errors import ToolSpawnError
from ..preflight_logging import get_logger
from .types import CheckId, ToolOutput

logger = get_logger()


@dataclass(frozen=True)
class ToolCommand:
    """A command line plus any extra environment it needs."""

    args: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return " ".join(self.args)


CHECK_COMMANDS: dict[CheckId, ToolCommand] = {
    CheckId.FMT: ToolCommand(("cargo", "fmt", "--", "--check")),
    CheckId.CLIPPY: ToolCommand(("cargo", "clippy", "--", "-D", "warnings")),
    CheckId.TEST: ToolCommand(("cargo", "test")),
    CheckId.CHECK_TESTS: ToolCommand(("cargo", "check", "--tests")),
    CheckId.CHECK_EXAMPLES: ToolCommand(("cargo", "check", "--examples")),
    CheckId.CHECK_BENCHES: ToolCommand(("cargo", "check", "--benches")),
    CheckId.UNUSED_DEPS: ToolCommand(("cargo", "shear")),
    CheckId.SECRETS: ToolCommand(("ripsecrets", ".")),
}

AUTOFIX_COMMANDS: dict[CheckId, ToolCommand] = {
    CheckId.FMT: ToolCommand(("cargo", "fmt")),
    # Lets clippy --fix touch files with staged or unstaged changes
    CheckId.CLIPPY: ToolCommand(
        ("cargo", "clippy", "--fix", "--allow-dirty"),
        env={"__CARGO_FIX_YOLO": "1"},
    ),
}


class ToolRunner:
    """Spawns the external tools behind checks and fixes.

    Example:
        runner = ToolRunner(Path("/path/to/crate"))
        result = runner.spawn_check(CheckId.FMT)
        if not result.success:
            print(result.text)
    """

    def __init__(self, project_path: Path | str | None = None):
        self.project_path = Path(project_path).resolve() if project_path else Path.cwd()

    def spawn_check(self, check: CheckId) -> ToolOutput:
        """Run the tool for a check and capture its output."""
        return self._spawn(CHECK_COMMANDS[check])

    def supports_autofix(self, check: CheckId) -> bool:
        return check in AUTOFIX_COMMANDS

    def spawn_autofix(self, check: CheckId) -> ToolOutput:
        """Run the fixer for a check.

        Raises:
            KeyError: If the check has no fixer; callers check
                supports_autofix() first.
        """
        return self._spawn(AUTOFIX_COMMANDS[check])

    def _spawn(self, command: ToolCommand) -> ToolOutput:
        """Run a command to completion.

        A non-zero exit is a normal result. Only a process that cannot be
        started at all raises.

        Raises:
            ToolSpawnError: If the executable is missing or not runnable.
        """
        env = {**os.environ, **command.env} if command.env else None
        logger.debug(f"Running: {command}")
        try:
            result = subprocess.run(
                list(command.args),
                cwd=self.project_path,
                env=env,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise ToolSpawnError(list(command.args), str(e)) from e

        logger.debug(f"'{command}' exited with {result.returncode}")
        return ToolOutput(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
