"""Git integration: branch lookup and hook management."""

from .hooks import HooksInstaller, HookStepResult, trigger_for_program
from .repository import current_branch, git_dir, list_branches

__all__ = [
    "current_branch",
    "list_branches",
    "git_dir",
    "HooksInstaller",
    "HookStepResult",
    "trigger_for_program",
]
