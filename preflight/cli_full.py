"""Click-based CLI for preflight.

Invoked three ways:
- as ``cargo preflight`` (cargo passes the subcommand word as an argument),
- as ``cargo-preflight`` / ``preflight`` directly (runs every profile),
- through a ``.git/hooks/pre-commit`` or ``pre-push`` symlink, where the
  program name selects the trigger.
"""

import sys
from pathlib import Path

import click

from . import __version__
from .checks.runner import CheckRunner
from .checks.tools import ToolRunner
from .cli.checklist import render_checklist
from .cli.errors import CLIError, handle_exception
from .cli.output import OutputConfig, OutputManager
from .cli.prompts import ClickPrompter, PromptCancelled
from .cli.wizard import ConfigWizard
from .config.loader import ProfileStore
from .config.models import KNOWN_TRIGGERS, RUN_ALL_TRIGGER
from .engine.branch_gate import BranchGate
from .engine.orchestrator import Orchestrator
from .engine.recovery import RecoveryController
from .engine.types import ProfileStatus, RunReport
from .git.hooks import HooksInstaller, trigger_for_program
from .git.repository import current_branch
from .preflight_logging import get_logger, setup_logging

logger = get_logger()


def _attach_terminal(ctx: click.Context) -> None:
    """Read prompts from the controlling terminal when git gave us no stdin.

    The terminal is closed and the original stdin restored when the command
    context closes.
    """
    if sys.stdin is not None and sys.stdin.isatty():
        return
    try:
        terminal = open("/dev/tty", encoding="utf-8")  # noqa: SIM115
    except OSError as e:
        logger.debug(f"No controlling terminal for prompts: {e}")
        return

    original = sys.stdin
    sys.stdin = terminal

    def detach() -> None:
        sys.stdin = original
        terminal.close()

    ctx.call_on_close(detach)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--init",
    "init_hooks",
    is_flag=True,
    help=(
        "Initialise preflight in the current repository. This will add git hooks "
        "to run checks according to local/global config (priority in that order)"
    ),
)
@click.option(
    "--ground",
    is_flag=True,
    help="Un-initialise preflight in the current repository. This will remove all git hooks",
)
@click.option("--config", "configure", is_flag=True, help="Configure preflight checks to run")
@click.option(
    "--checklist",
    is_flag=True,
    help="Output the current configuration that will be applied in this repository",
)
@click.option(
    "--hook",
    type=click.Choice([*KNOWN_TRIGGERS, RUN_ALL_TRIGGER]),
    default=None,
    help="Run as if triggered by this hook (default: detected from the program name)",
)
@click.option("--force", is_flag=True, help="With --init, replace hooks preflight did not create")
@click.option(
    "-p",
    "--project",
    "project_path",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Repository to check (default: current directory)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Only show failures")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write a debug log to this file",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Format of the --log-file output",
)
@click.argument("extra", nargs=-1, type=click.UNPROCESSED)
@click.version_option(version=__version__, prog_name="cargo-preflight")
@click.pass_context
def cli(
    ctx: click.Context,
    init_hooks: bool,
    ground: bool,
    configure: bool,
    checklist: bool,
    hook: str | None,
    force: bool,
    project_path: str | None,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    log_file: str | None,
    log_format: str,
    extra: tuple[str, ...],
) -> None:
    """Preflight - run local 'CI' checks on git commit and push.

    Without flags, runs the checks of every profile that applies to the
    current hook and branch.

    Examples:
        cargo preflight --init
        cargo preflight --config
        cargo preflight --checklist
        cargo preflight
    """
    setup_logging(
        quiet=quiet,
        verbose=verbose,
        log_file=Path(log_file) if log_file else None,
        log_format=log_format,
    )
    output = OutputManager(OutputConfig.from_flags(quiet=quiet, no_color=no_color))
    project = Path(project_path).resolve() if project_path else Path.cwd()
    store = ProfileStore(project)

    if extra:
        logger.debug(f"Ignoring positional arguments: {list(extra)}")

    try:
        if init_hooks:
            _init(store, output, force)
        elif ground:
            _ground(project, output)
        elif configure:
            ConfigWizard(ClickPrompter(), store, output).run()
        elif checklist:
            click.echo(render_checklist(store.load(), store.active_scope()), color=output.config.use_color)
        else:
            if hook is None:
                hook = trigger_for_program(ctx.info_name)
                if hook != RUN_ALL_TRIGGER:
                    _attach_terminal(ctx)
            report = _run(store, project, hook, output)
            ctx.exit(report.exit_code)
    except CLIError as e:
        message, exit_code = handle_exception(e, use_color=output.config.use_color, verbose=verbose)
        click.echo(message, err=True)
        ctx.exit(exit_code)
    except PromptCancelled:
        output.error("Configuration cancelled, nothing was saved")
        ctx.exit(1)


def _init(store: ProfileStore, output: OutputManager, force: bool) -> None:
    output.plain("Initialising...")
    triggers = store.load().triggers() or list(KNOWN_TRIGGERS)
    results = HooksInstaller(store.project_path).install(triggers, force=force)
    for result in results:
        if not result.success:
            output.error(result.message)
        elif result.skipped:
            output.info(result.message)
        else:
            output.success(result.message, force=True)
    if not all(r.success for r in results):
        raise click.exceptions.Exit(1)


def _ground(project: Path, output: OutputManager) -> None:
    output.plain("Closing hanger doors...")
    for result in HooksInstaller(project).remove():
        if result.skipped:
            output.info(result.message)
        else:
            output.success(result.message, force=True)


def _run(store: ProfileStore, project: Path, hook: str, output: OutputManager) -> RunReport:
    profile_set = store.load()

    output.banner("🛫 Running Preflight Checks...")
    if hook == RUN_ALL_TRIGGER:
        output.plain("Running all defined preflight checks...")

    runner = CheckRunner(ToolRunner(project), output)
    orchestrator = Orchestrator(
        runner=runner,
        gate=BranchGate(lambda: current_branch(project), output),
        recovery=RecoveryController(runner, ClickPrompter(), output),
        output=output,
    )
    report = orchestrator.execute(profile_set, hook)

    output.summary(
        total=len(report.profiles),
        passed=report.count(ProfileStatus.PASSED),
        recovered=report.count(ProfileStatus.RECOVERED),
        failed=report.count(ProfileStatus.FAILED),
        skipped=report.count(ProfileStatus.SKIPPED_BRANCH),
    )
    return report


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
