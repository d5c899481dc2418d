"""Tests for the recovery state machine."""

from preflight.checks.runner import CheckRunner
from preflight.checks.types import Failed, ReasonKind, ToolOutput
from preflight.cli.prompts import PromptCancelled
from preflight.config.models import Profile
from preflight.engine.recovery import RecoveryController
from preflight.engine.types import RecoveryAction


def make_controller(tools, prompter, output):
    runner = CheckRunner(tools, output)
    return RecoveryController(runner, prompter, output)


class TestNoRecovery:
    def test_terminates_without_prompting(self, make_tools, make_prompter, output):
        """Test that neither flag means no questions are asked."""
        prompter = make_prompter()
        controller = make_controller(make_tools(), prompter, output)
        failure = Failed(ReasonKind.FMT, "diff")

        decision = controller.recover(Profile(checks=["fmt"], autofix=False), 0, failure)

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure == failure
        assert prompter.asked == []


class TestAutofix:
    """Tests for the autofix branch."""

    def test_accepted_fix_retries_same_index(self, make_tools, make_prompter, output):
        tools = make_tools()
        controller = make_controller(tools, make_prompter(True), output)

        decision = controller.recover(Profile(checks=["test", "fmt"]), 1, Failed(ReasonKind.FMT))

        assert decision.action is RecoveryAction.RETRY
        assert decision.resume_index == 1
        assert tools.fix_calls == ["fmt"]

    def test_prompt_names_check(self, make_tools, make_prompter, output):
        prompter = make_prompter(True)
        make_controller(make_tools(), prompter, output).recover(
            Profile(checks=["clippy"]), 0, Failed(ReasonKind.CLIPPY)
        )
        assert prompter.asked == ["Do you want to automatically apply clippy suggestions?"]

    def test_declined_without_override_terminates(self, make_tools, make_prompter, output):
        tools = make_tools()
        failure = Failed(ReasonKind.FMT, "diff")
        decision = make_controller(tools, make_prompter(False), output).recover(
            Profile(checks=["fmt"]), 0, failure
        )

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure == failure
        assert tools.fix_calls == []

    def test_cancelled_prompt_terminates(self, make_tools, make_prompter, output):
        """Test that a dismissed autofix prompt ends even with override enabled."""
        prompter = make_prompter(PromptCancelled)
        failure = Failed(ReasonKind.FMT, "diff")
        decision = make_controller(make_tools(), prompter, output).recover(
            Profile(checks=["fmt"], override=True), 0, failure
        )

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure == failure
        assert len(prompter.asked) == 1
        assert "Error autofixing preflight" in output.config.err_stream.getvalue()

    def test_failed_fix_falls_through_to_override(self, make_tools, make_prompter, output):
        tools = make_tools(fixes={"clippy": [ToolOutput(success=False, stderr="cannot fix")]})
        prompter = make_prompter(True, True)

        decision = make_controller(tools, prompter, output).recover(
            Profile(checks=["clippy", "test"], override=True), 0, Failed(ReasonKind.CLIPPY)
        )

        assert decision.action is RecoveryAction.SKIP
        assert decision.resume_index == 1
        assert prompter.asked[1] == "Do you want to override clippy preflight check?"

    def test_failed_fix_without_override_surfaces_fix_failure(
        self, make_tools, make_prompter, output
    ):
        tools = make_tools(fixes={"fmt": [ToolOutput(success=False, stderr="rustfmt crashed")]})
        decision = make_controller(tools, make_prompter(True), output).recover(
            Profile(checks=["fmt"]), 0, Failed(ReasonKind.FMT, "diff")
        )

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure == Failed(ReasonKind.FMT, "rustfmt crashed")

    def test_check_without_fixer(self, make_tools, make_prompter, output):
        """Test that accepting autofix for a check with no fixer ends the run."""
        tools = make_tools()
        decision = make_controller(tools, make_prompter(True), output).recover(
            Profile(checks=["test"]), 0, Failed(ReasonKind.TEST, "1 failed")
        )

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure.reason is ReasonKind.TEST
        assert tools.fix_calls == []


class TestOverride:
    """Tests for the override branch."""

    def test_accepted_override_skips(self, make_tools, make_prompter, output):
        decision = make_controller(make_tools(), make_prompter(True), output).recover(
            Profile(checks=["fmt", "secrets", "test"], autofix=False, override=True),
            1,
            Failed(ReasonKind.SECRETS),
        )

        assert decision.action is RecoveryAction.SKIP
        assert decision.resume_index == 2
        assert "Skipping secrets..." in output.config.stream.getvalue()

    def test_declined_override(self, make_tools, make_prompter, output):
        decision = make_controller(make_tools(), make_prompter(False), output).recover(
            Profile(checks=["test"], autofix=False, override=True),
            0,
            Failed(ReasonKind.TEST, "1 failed"),
        )

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure == Failed(ReasonKind.OVERRIDE_CANCELLED, "1 failed")
        assert "Preflight ended due to failed check: test" in output.config.err_stream.getvalue()

    def test_cancelled_override_counts_as_decline(self, make_tools, make_prompter, output):
        decision = make_controller(make_tools(), make_prompter(PromptCancelled), output).recover(
            Profile(checks=["test"], autofix=False, override=True),
            0,
            Failed(ReasonKind.TEST),
        )

        assert decision.action is RecoveryAction.TERMINATE
        assert decision.failure == Failed(ReasonKind.OVERRIDE_CANCELLED, "test")

    def test_declined_autofix_then_override(self, make_tools, make_prompter, output):
        prompter = make_prompter(False, True)
        decision = make_controller(make_tools(), prompter, output).recover(
            Profile(checks=["fmt"], override=True), 0, Failed(ReasonKind.FMT)
        )

        assert decision.action is RecoveryAction.SKIP
        assert decision.resume_index == 1
        assert len(prompter.asked) == 2
