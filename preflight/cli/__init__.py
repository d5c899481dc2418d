"""CLI utilities package for preflight.

Modules:
    output: OutputManager for check status lines with color/quiet support
    errors: Structured error types with recovery suggestions
    prompts: Injectable prompting used by recovery and the wizard
    checklist: Rendering of the active checklist
    wizard: Interactive configuration wizard
"""

from .errors import (
    CLIError,
    ConfigurationError,
    ErrorCategory,
    HookInstallError,
    NotAGitRepositoryError,
    ToolSpawnError,
    handle_exception,
)
from .output import OutputConfig, OutputManager, should_use_color
from .prompts import ClickPrompter, PromptCancelled, Prompter

__all__ = [
    # Output
    "OutputConfig",
    "OutputManager",
    "should_use_color",
    # Errors
    "CLIError",
    "ErrorCategory",
    "ConfigurationError",
    "ToolSpawnError",
    "HookInstallError",
    "NotAGitRepositoryError",
    "handle_exception",
    # Prompts
    "Prompter",
    "ClickPrompter",
    "PromptCancelled",
]
