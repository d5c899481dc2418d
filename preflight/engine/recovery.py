"""Recovery state machine for a failed check.

    Start(i) --autofix--> AskAutofix(i) --yes--> Applying(i) --ok--> resume at i
                                |                     |
                                no               fix failed
                                v                     v
             --override--> AskOverride(i) --yes--> resume at i + 1
                                |
                                no --> Terminate(i)

A profile with neither flag terminates immediately without prompting.
"""

from ..checks.runner import CheckRunner
from ..checks.types import Failed, ReasonKind
from ..cli.output import OutputManager
from ..cli.prompts import PromptCancelled, Prompter
from ..config.models import Profile
from ..preflight_logging import get_logger
from .types import RecoveryDecision

logger = get_logger()

AUTOFIX_HELP = (
    "WARNING: This will apply changes to your dirty workspace, and may be "
    "potentially destructive.\nNo will end and fail preflight checks, yes will "
    "apply suggestions and continue"
)


class RecoveryController:
    """Decides and performs the next step after check ``index`` failed."""

    def __init__(
        self,
        runner: CheckRunner,
        prompter: Prompter,
        output: OutputManager | None = None,
    ):
        self.runner = runner
        self.prompter = prompter
        self.output = output or runner.output

    def recover(self, profile: Profile, index: int, failure: Failed) -> RecoveryDecision:
        """Run the recovery state machine once.

        Args:
            profile: Profile whose check failed.
            index: Position of the failed check in ``profile.checks``.
            failure: The failure as reported by the runner.

        Returns:
            RETRY at ``index`` after a successful fix, SKIP to ``index + 1``
            after an accepted override, or TERMINATE with the failure to
            surface.
        """
        check = profile.checks[index]

        if profile.autofix:
            try:
                accepted = self.prompter.confirm(
                    f"Do you want to automatically apply {check} suggestions?",
                    default=False,
                    help_text=AUTOFIX_HELP,
                )
            except PromptCancelled:
                logger.warning(f"Autofix prompt for {check} cancelled")
                self.output.error("Error autofixing preflight")
                return RecoveryDecision.terminate(failure)

            if accepted:
                fix_outcome = self.runner.fix(check)
                if not isinstance(fix_outcome, Failed):
                    logger.info(f"Applied fix for {check}, retrying it at index {index}")
                    return RecoveryDecision.retry(index)
                logger.info(f"Autofix for {check} failed")
                failure = fix_outcome
            else:
                logger.debug(f"Autofix for {check} declined")

        if profile.override:
            return self._override(check, index, failure)

        return RecoveryDecision.terminate(failure)

    def _override(self, check: str, index: int, failure: Failed) -> RecoveryDecision:
        try:
            accepted = self.prompter.confirm(
                f"Do you want to override {check} preflight check?",
                default=False,
                help_text=f"This will skip {check} and continue preflight checks",
            )
        except PromptCancelled:
            logger.warning(f"Override prompt for {check} cancelled")
            accepted = False

        if accepted:
            logger.info(f"Overriding {check}, resuming at index {index + 1}")
            self.output.check_skipped(check)
            return RecoveryDecision.skip(index)

        self.output.error(f"Preflight ended due to failed check: {check}")
        return RecoveryDecision.terminate(
            Failed(ReasonKind.OVERRIDE_CANCELLED, failure.output or check)
        )
