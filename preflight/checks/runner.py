"""Runs named checks and ordered check sequences."""

from typing import Protocol, Sequence

from ..cli.output import OutputManager
from ..preflight_logging import get_logger
from .types import (
    CheckId,
    Failed,
    Outcome,
    Passed,
    ReasonKind,
    ToolOutput,
    UnknownCheck,
    parse_check,
)

logger = get_logger()


class ToolBackend(Protocol):
    """What CheckRunner needs from the process layer."""

    def spawn_check(self, check: CheckId) -> ToolOutput: ...

    def supports_autofix(self, check: CheckId) -> bool: ...

    def spawn_autofix(self, check: CheckId) -> ToolOutput: ...


class CheckRunner:
    """Executes checks by name and reports one status line per check.

    Check failures are returned as Failed outcomes. A ToolSpawnError from
    the backend is not caught here; it aborts the whole run.
    """

    def __init__(self, tools: ToolBackend, output: OutputManager | None = None):
        self.tools = tools
        self.output = output or OutputManager()

    def run(self, check_name: str) -> Outcome:
        """Run one check.

        Args:
            check_name: Identifier as written in the profile.

        Returns:
            Passed, or Failed carrying the captured diagnostics.
        """
        check = parse_check(check_name)
        if isinstance(check, UnknownCheck):
            logger.info(f"Invalid check in config: {check.name}")
            self.output.check_failed(f"Invalid check '{check.name}'")
            return Failed(ReasonKind.INVALID_CHECK, check.name)

        result = self.tools.spawn_check(check)
        if result.success:
            self.output.check_passed(check.label)
            return Passed()

        self.output.check_failed(check.label, result.text)
        return Failed(ReasonKind.for_check(check), result.text)

    def run_sequence(self, checks: Sequence[str], start: int = 0) -> tuple[Outcome, int]:
        """Run checks[start:] in order, stopping at the first failure.

        Returns:
            The terminal outcome and the index in ``checks`` where execution
            stopped, or ``len(checks)`` if everything passed.
        """
        for index in range(start, len(checks)):
            outcome = self.run(checks[index])
            if isinstance(outcome, Failed):
                return outcome, index
        return Passed(), len(checks)

    def fix(self, check_name: str) -> Outcome:
        """Try to repair whatever made a check fail.

        Unknown names and checks without a fixer produce a Failed outcome
        instead of raising, so the caller can fall through to override.
        """
        check = parse_check(check_name)
        if isinstance(check, UnknownCheck):
            return Failed(ReasonKind.INVALID_CHECK, check.name)
        if not self.tools.supports_autofix(check):
            logger.info(f"No autofix available for {check.value}")
            return Failed(ReasonKind.for_check(check), f"No autofix available for {check.value}")

        result = self.tools.spawn_autofix(check)
        if result.success:
            self.output.fix_applied(check.value)
            return Passed()

        self.output.check_failed(f"Applying {check.value} fix", result.text)
        return Failed(ReasonKind.for_check(check), result.text)
