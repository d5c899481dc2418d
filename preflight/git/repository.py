"""Read-only git queries used by branch rules, hooks, and the wizard."""

import subprocess
from pathlib import Path

from ..preflight_logging import get_logger

logger = get_logger()


def _git(args: list[str], cwd: Path) -> str | None:
    """Run a git command and return stripped stdout, or None on any failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except (FileNotFoundError, OSError) as e:
        logger.debug(f"git {' '.join(args)} could not run: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"git {' '.join(args)} failed: {result.stderr.strip()}")
        return None
    return result.stdout.strip()


def current_branch(path: Path | str | None = None) -> str | None:
    """Name of the checked out branch.

    Returns:
        The branch name, or None outside a repository, with git missing,
        or on a detached HEAD.
    """
    cwd = Path(path) if path else Path.cwd()
    name = _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd)
    if not name or name == "HEAD":
        return None
    return name


def list_branches(path: Path | str | None = None) -> list[str]:
    """Local branch names, empty outside a repository."""
    cwd = Path(path) if path else Path.cwd()
    output = _git(["for-each-ref", "--format=%(refname:short)", "refs/heads/"], cwd)
    if not output:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def git_dir(path: Path | str | None = None) -> Path | None:
    """Absolute path of the repository's git directory."""
    cwd = Path(path).resolve() if path else Path.cwd()
    output = _git(["rev-parse", "--git-dir"], cwd)
    if not output:
        return None
    git_path = Path(output)
    return git_path if git_path.is_absolute() else (cwd / git_path).resolve()
