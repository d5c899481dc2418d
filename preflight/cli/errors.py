"""Structured error types for the CLI with recovery suggestions.

Only configuration and transport problems are raised as errors; a check
that runs and fails is an ordinary outcome, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

EXIT_CHECK_FAILED = 1
EXIT_CONFIGURATION = 2
EXIT_TRANSPORT = 3


class ErrorCategory(Enum):
    """Categories of CLI errors for organization and handling."""

    CONFIGURATION = "configuration"  # Unreadable or invalid profile store
    TRANSPORT = "transport"  # External tool cannot be spawned
    FILE_SYSTEM = "file_system"  # Hook symlinks, permissions


@dataclass
class CLIError(Exception):
    """Base class for structured CLI errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class ConfigurationError(CLIError):
    """Error reading or validating the profile store."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = (
            "Fix the file by hand or recreate it with 'cargo preflight --config'"
        )
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=EXIT_CONFIGURATION,
        )


class ToolSpawnError(CLIError):
    """An external check tool could not be located or started."""

    def __init__(self, command: list[str], original_error: str | None = None):
        program = command[0] if command else "<empty>"
        message = f"Cannot run '{program}'"
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(
            category=ErrorCategory.TRANSPORT,
            message=message,
            suggestion=f"Make sure '{program}' is installed and on your PATH",
            details={"command": " ".join(command)},
            exit_code=EXIT_TRANSPORT,
        )


class HookInstallError(CLIError):
    """Error creating or removing git hook symlinks."""

    def __init__(self, message: str, hook_path: str | None = None):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=message,
            suggestion="Check permissions on .git/hooks or remove the existing hook",
            details={"hook": hook_path} if hook_path else None,
            exit_code=1,
        )


class NotAGitRepositoryError(CLIError):
    """Error when hooks are managed outside a git working tree."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Not a git repository: {path}",
            suggestion="Run 'git init' first or change into your repository",
            details={"path": path},
            exit_code=1,
        )


def handle_exception(
    error: CLIError,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert a CLI error to formatted output and exit code.

    Args:
        error: The error to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    message = error.format(use_color=use_color)
    exit_code = error.exit_code

    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, exit_code
