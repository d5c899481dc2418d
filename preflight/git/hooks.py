"""Git hook installation by symlinking the preflight executable."""

import os
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from ..cli.errors import HookInstallError, NotAGitRepositoryError
from ..config.models import RUN_ALL_TRIGGER
from ..preflight_logging import get_logger
from .repository import git_dir

logger = get_logger()

EXECUTABLE_NAME = "cargo-preflight"

TRIGGER_HOOKS = {
    "commit": "pre-commit",
    "push": "pre-push",
}

HOOK_TRIGGERS = {hook: trigger for trigger, hook in TRIGGER_HOOKS.items()}


def trigger_for_program(program: str | None) -> str:
    """Trigger implied by the name preflight was invoked under.

    ``.git/hooks/pre-push`` maps to ``push``; anything that is not a hook
    name is a manual run of every profile.
    """
    if not program:
        return RUN_ALL_TRIGGER
    return HOOK_TRIGGERS.get(Path(program).name, RUN_ALL_TRIGGER)


def find_executable() -> Path:
    """Locate the installed preflight executable to link hooks against."""
    found = shutil.which(EXECUTABLE_NAME)
    if found:
        return Path(found).resolve()
    argv0 = Path(sys.argv[0])
    if argv0.name == EXECUTABLE_NAME and argv0.exists():
        return argv0.resolve()
    raise HookInstallError(
        f"Cannot find the '{EXECUTABLE_NAME}' executable on PATH",
    )


@dataclass
class HookStepResult:
    """Result of installing or removing one hook."""

    hook: str
    success: bool
    message: str
    skipped: bool = False
    details: dict[str, Any] = field(default_factory=dict)


class HooksInstaller:
    """Installs and removes preflight's git hooks for a repository."""

    def __init__(self, project_path: Path | str | None = None, executable: Path | None = None):
        self.project_path = Path(project_path).resolve() if project_path else Path.cwd()
        self._executable = executable

    @property
    def executable(self) -> Path:
        if self._executable is None:
            self._executable = find_executable()
        return self._executable

    def hooks_dir(self) -> Path:
        """The repository's hooks directory.

        Raises:
            NotAGitRepositoryError: Outside a git working tree.
        """
        repo_git_dir = git_dir(self.project_path)
        if repo_git_dir is None:
            raise NotAGitRepositoryError(str(self.project_path))
        return repo_git_dir / "hooks"

    def is_preflight_hook(self, hook_path: Path) -> bool:
        """Whether a hook file is a symlink to preflight."""
        if not hook_path.is_symlink():
            return False
        target = Path(os.readlink(hook_path))
        if target.name == EXECUTABLE_NAME:
            return True
        return self._executable is not None and target == self._executable

    def install(self, triggers: Iterable[str], force: bool = False) -> list[HookStepResult]:
        """Symlink a hook for each trigger.

        Args:
            triggers: Trigger names such as "commit" and "push".
            force: Replace hooks that are not preflight's.

        Raises:
            HookInstallError: For a trigger that has no git hook.
            NotAGitRepositoryError: Outside a git working tree.
        """
        hooks = []
        for trigger in triggers:
            if trigger not in TRIGGER_HOOKS:
                raise HookInstallError(f"Invalid hook in config: {trigger}")
            hooks.append(TRIGGER_HOOKS[trigger])

        hooks_dir = self.hooks_dir()
        hooks_dir.mkdir(parents=True, exist_ok=True)
        return [self._install_one(hooks_dir / hook, force) for hook in hooks]

    def _install_one(self, hook_path: Path, force: bool) -> HookStepResult:
        hook = hook_path.name
        if hook_path.is_symlink() or hook_path.exists():
            if self.is_preflight_hook(hook_path):
                return HookStepResult(
                    hook=hook,
                    success=True,
                    skipped=True,
                    message=f"{hook} already installed",
                )
            if not force:
                return HookStepResult(
                    hook=hook,
                    success=False,
                    message=f"{hook} exists and is not a preflight hook (use --force to replace)",
                    details={"path": str(hook_path)},
                )
            hook_path.unlink()

        try:
            hook_path.symlink_to(self.executable)
        except OSError as e:
            raise HookInstallError(f"Failed to link {hook}: {e}", str(hook_path)) from e

        logger.info(f"Linked {hook_path} -> {self.executable}")
        return HookStepResult(
            hook=hook,
            success=True,
            message=f"Installed {hook}",
            details={"path": str(hook_path), "target": str(self.executable)},
        )

    def remove(self) -> list[HookStepResult]:
        """Remove every preflight hook; foreign hooks are left in place."""
        hooks_dir = self.hooks_dir()
        results = []
        for hook in TRIGGER_HOOKS.values():
            hook_path = hooks_dir / hook
            if not (hook_path.is_symlink() or hook_path.exists()):
                results.append(
                    HookStepResult(hook=hook, success=True, skipped=True, message=f"{hook} not installed")
                )
                continue
            if not self.is_preflight_hook(hook_path):
                results.append(
                    HookStepResult(
                        hook=hook,
                        success=True,
                        skipped=True,
                        message=f"{hook} is not a preflight hook, left in place",
                    )
                )
                continue
            try:
                hook_path.unlink()
            except OSError as e:
                raise HookInstallError(f"Failed to remove {hook}: {e}", str(hook_path)) from e
            logger.info(f"Removed {hook_path}")
            results.append(HookStepResult(hook=hook, success=True, message=f"Removed {hook}"))
        return results
