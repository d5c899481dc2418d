"""Top-level driver: selects profiles for a hook and runs them to completion."""

from ..checks.runner import CheckRunner
from ..checks.types import Failed
from ..cli.output import OutputManager
from ..config.models import RUN_ALL_TRIGGER, Profile, ProfileSet
from ..preflight_logging import get_logger
from .branch_gate import BranchGate
from .locator import locate
from .recovery import RecoveryController
from .types import (
    ExecutionCursor,
    ProfileReport,
    ProfileStatus,
    RecoveryAction,
    RunReport,
)

logger = get_logger()


class Orchestrator:
    """Runs every applicable profile of a ProfileSet for one hook invocation.

    Each profile is run from an ExecutionCursor in a loop: run the remaining
    checks, and on failure let the RecoveryController move the cursor
    (retry the same check after a fix, skip past it after an override) or
    end the profile. Profiles never affect each other.

    Example:
        orchestrator = Orchestrator(runner, gate, recovery)
        report = orchestrator.execute(profile_set, "push")
        sys.exit(report.exit_code)
    """

    def __init__(
        self,
        runner: CheckRunner,
        gate: BranchGate,
        recovery: RecoveryController,
        output: OutputManager | None = None,
    ):
        self.runner = runner
        self.gate = gate
        self.recovery = recovery
        self.output = output or runner.output

    def select(self, profile_set: ProfileSet, hook: str) -> list[tuple[int, Profile]]:
        """Profiles that fire for ``hook``, with their declaration position."""
        return [
            (position, profile)
            for position, profile in enumerate(profile_set.profiles)
            if profile.fires_for(hook)
        ]

    def execute(self, profile_set: ProfileSet, hook: str) -> RunReport:
        """Run the selected profiles in declaration order.

        Args:
            profile_set: Profiles loaded for this invocation.
            hook: Trigger name ("commit", "push"), or "preflight" to run
                every profile regardless of its triggers.

        Returns:
            RunReport; its exit_code is non-zero if any profile failed.
        """
        report = RunReport(hook=hook)
        selected = self.select(profile_set, hook)
        logger.debug(
            f"{len(selected)} of {len(profile_set.profiles)} profile(s) selected for '{hook}'",
            extra={"hook": hook},
        )

        for position, profile in selected:
            if hook == RUN_ALL_TRIGGER:
                self.output.plain(f"{profile.run_when} checks:")
            report.add(self.run_profile(position, profile))

        return report

    def run_profile(self, position: int, profile: Profile) -> ProfileReport:
        """Run one profile, including any recovery, to a terminal state."""
        profile_report = ProfileReport(position=position, profile=profile)

        if not self.gate.applies(profile.branches):
            logger.info(f"Profile {position} skipped by branch rules", extra={"profile_index": position})
            self.output.info("Branch not included in preflight checks, skipping...")
            profile_report.status = ProfileStatus.SKIPPED_BRANCH
            return profile_report

        cursor = ExecutionCursor(profile, 0)
        while True:
            outcome, stopped_at = self.runner.run_sequence(profile.checks, cursor.index)
            if not isinstance(outcome, Failed):
                if profile_report.fixed or profile_report.overridden:
                    profile_report.status = ProfileStatus.RECOVERED
                return profile_report

            index = locate(profile.checks, outcome, start=stopped_at)
            if index is None:
                logger.error(
                    f"Failure '{outcome.reason.value}' maps to no check of profile {position}",
                    extra={"profile_index": position},
                )
                return self._fail(profile_report, outcome)

            decision = self.recovery.recover(profile, index, outcome)
            if decision.action is RecoveryAction.TERMINATE:
                return self._fail(profile_report, decision.failure or outcome)

            if decision.action is RecoveryAction.RETRY:
                profile_report.fixed.append(profile.checks[index])
            else:
                profile_report.overridden.append(profile.checks[index])

            logger.debug(
                f"Resuming profile {position} at index {decision.resume_index}",
                extra={"profile_index": position, "resume_index": decision.resume_index},
            )
            cursor = cursor.resume_at(decision.resume_index)

    def _fail(self, profile_report: ProfileReport, failure: Failed) -> ProfileReport:
        profile_report.status = ProfileStatus.FAILED
        profile_report.failure = failure
        return profile_report
