"""Interactive configuration wizard for --config."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from ..checks.types import CheckId
from ..config.loader import ConfigScope, ProfileStore
from ..config.models import KNOWN_TRIGGERS, Profile, ProfileSet
from ..git.repository import list_branches
from ..preflight_logging import get_logger
from .output import OutputManager
from .prompts import ClickPrompter

logger = get_logger()


class ConfigWizard:
    """Builds a ProfileSet one profile at a time and stores it.

    Example:
        wizard = ConfigWizard(ClickPrompter(), ProfileStore(Path.cwd()))
        path = wizard.run()
    """

    def __init__(
        self,
        prompter: ClickPrompter,
        store: ProfileStore,
        output: OutputManager | None = None,
        branch_source: Callable[[Path], list[str]] | None = None,
    ):
        self.prompter = prompter
        self.store = store
        self.output = output or OutputManager()
        self.branch_source = branch_source or list_branches

    def run(self) -> Path:
        """Ask for a scope and profiles, then store them.

        Returns:
            Path of the written configuration file.
        """
        scope = ConfigScope(
            self.prompter.select(
                "Do you want to make a global or local config?",
                [ConfigScope.GLOBAL.value, ConfigScope.LOCAL.value],
            )
        )

        profiles: list[Profile] = []
        while True:
            profiles.append(self.ask_profile())
            if not self.prompter.confirm(
                "Do you want to add another configuration?",
                default=False,
                help_text="Choose 'yes' to create another configuration.",
            ):
                break

        path = self.store.store(ProfileSet(preflight=profiles), scope)
        self.output.success(f"Saved {len(profiles)} profile(s) to {path}", force=True)
        return path

    def ask_profile(self) -> Profile:
        """Collect the fields of one profile."""
        vocabulary = [check.value for check in CheckId]

        checks: list[str] = []
        while not checks:
            checks = self.prompter.multi_select("Select checks to run", vocabulary)
            if not checks:
                self.output.warning("Select at least one check", force=True)

        run_when = self.prompter.multi_select("Select when to run checks", list(KNOWN_TRIGGERS))

        known_branches = self.branch_source(self.store.project_path)
        hint = "Leave blank to run on any branch"
        if known_branches:
            hint = f"{hint}. Local branches: {' '.join(known_branches)}"
        branches = self.prompter.text(
            "Choose branches to run checks on (space separated list)",
            default="",
            help_text=hint,
        )

        autofix = self.prompter.confirm(
            "Enable autofix functionality?",
            default=False,
            help_text="Where possible, this will enable you to automatically apply suggestions",
        )
        override = self.prompter.confirm(
            "Enable override functionality?",
            default=False,
            help_text="This will allow you to override Preflight on failed checks",
        )

        profile = Profile(
            run_when=run_when,
            branches=branches.split(),
            checks=checks,
            autofix=autofix,
            override=override,
        )
        logger.debug(f"Wizard built profile: {profile.model_dump()}")
        return profile
