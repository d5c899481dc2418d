"""Decides whether a profile applies to the current branch."""

from typing import Callable, Sequence

from ..cli.output import OutputManager
from ..git.repository import current_branch
from ..preflight_logging import get_logger

logger = get_logger()

BranchLookup = Callable[[], str | None]


class BranchGate:
    """Branch filter for profiles.

    An unresolvable current branch (no repository, detached HEAD, git not
    installed) lets the profile run: preflight never silently does nothing
    because of an unrelated environment problem.
    """

    def __init__(
        self,
        branch_lookup: BranchLookup | None = None,
        output: OutputManager | None = None,
    ):
        self.branch_lookup = branch_lookup or current_branch
        self.output = output or OutputManager()

    def applies(self, branches: Sequence[str]) -> bool:
        """Whether a profile scoped to ``branches`` runs here."""
        if not branches:
            return True

        branch = self.branch_lookup()
        if branch is None:
            logger.info("Current branch could not be resolved; running profile anyway")
            self.output.warning(
                "It looks like you're not on a git branch... Preflight will "
                "continue, but there may be an error later",
                force=True,
            )
            return True

        logger.debug(f"On branch {branch}, profile branches: {list(branches)}")
        return branch in branches
