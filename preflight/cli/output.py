"""Centralized output manager for check status lines and run summaries.

Supports the NO_COLOR environment variable, the --no-color flag, quiet
mode, and accessible plain-text symbols when colors are off.

Following the NO_COLOR standard: https://no-color.org/
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

import click


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Determine if color output should be used.

    Priority order:
    1. Explicit --no-color flag (if passed)
    2. NO_COLOR environment variable
    3. FORCE_COLOR environment variable
    4. TTY detection (only colorize if output is a terminal)

    Args:
        explicit_flag: True forces colors, False disables them, None auto-detects.
        stream: Output stream to check for TTY. Defaults to stdout.

    Returns:
        True if colors should be used, False otherwise.
    """
    if explicit_flag is not None:
        return explicit_flag

    # Any value (including empty) means "no color"
    if "NO_COLOR" in os.environ:
        return False

    if "FORCE_COLOR" in os.environ:
        return True

    if stream is None:
        stream = sys.stdout
    if hasattr(stream, "isatty") and not stream.isatty():
        return False

    return True


@dataclass
class OutputConfig:
    """Configuration for CLI output behavior.

    Attributes:
        use_color: Whether to use ANSI color codes in output.
        quiet: Suppress everything except failures and errors.
        stream: Output stream (default: stdout).
        err_stream: Error stream (default: stderr).
    """

    use_color: bool = True
    quiet: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        quiet: bool = False,
        no_color: bool = False,
    ) -> "OutputConfig":
        """Create OutputConfig from CLI flags."""
        use_color = should_use_color(explicit_flag=False if no_color else None)
        return cls(use_color=use_color, quiet=quiet)


class OutputManager:
    """User-visible output for a preflight run.

    Example:
        >>> output = OutputManager(OutputConfig(use_color=False))
        >>> output.check_passed("Formatting")
            [√] Formatting preflight check passed
        >>> output.check_failed("Tests", "1 test failed")
            [x] Tests preflight check failed:
        1 test failed
    """

    COLORS = {
        "green": "\033[92m",
        "red": "\033[91m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "italic": "\033[3m",
        "reset": "\033[0m",
    }

    SYMBOLS = {
        "success": {"color": "\033[92m✓\033[0m", "plain": "[OK]"},
        "error": {"color": "\033[91m✗\033[0m", "plain": "[FAIL]"},
        "warning": {"color": "\033[93m⚠\033[0m", "plain": "[WARN]"},
        "info": {"color": "\033[94mℹ\033[0m", "plain": "[INFO]"},
        "skip": {"color": "\033[2m○\033[0m", "plain": "[SKIP]"},
    }

    INDENT = "    "

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _get_symbol(self, symbol_type: str) -> str:
        symbol_data = self.SYMBOLS.get(symbol_type, self.SYMBOLS["info"])
        return symbol_data["color"] if self.config.use_color else symbol_data["plain"]

    def _colorize(self, text: str, *styles: str) -> str:
        """Apply one or more styles to text if colors are enabled."""
        if not self.config.use_color:
            return text
        codes = "".join(self.COLORS.get(style, "") for style in styles)
        return f"{codes}{text}{self.COLORS['reset']}"

    def _output(
        self,
        message: str,
        symbol_type: str | None = None,
        err: bool = False,
        force: bool = False,
    ) -> None:
        """Output a message with optional symbol prefix.

        Args:
            message: Message to output.
            symbol_type: Type of symbol to prefix (or None for no symbol).
            err: Output to stderr instead of stdout.
            force: Output even in quiet mode.
        """
        if self.config.quiet and not err and not force:
            return

        stream = self.config.err_stream if err else self.config.stream

        if symbol_type:
            line = f"{self._get_symbol(symbol_type)} {message}"
        else:
            line = message

        click.echo(line, file=stream, color=self.config.use_color)

    # Check status lines

    def check_passed(self, label: str) -> None:
        """One-line status for a passing check."""
        line = self._colorize(f"[√] {label} preflight check passed", "green")
        self._output(f"{self.INDENT}{line}")

    def check_failed(self, label: str, captured_output: str = "") -> None:
        """Status line for a failing check followed by its diagnostics.

        Always shown, even in quiet mode, so the user can act on the failure
        without re-running the tool.
        """
        line = self._colorize(f"[x] {label} preflight check failed:", "red", "bold")
        self._output(f"{self.INDENT}{line}", force=True)
        if captured_output.strip():
            self._output(captured_output.rstrip("\n"), force=True)

    def fix_applied(self, check: str) -> None:
        """Status line for a successful autofix."""
        line = self._colorize(f"[√] Applying {check} fix successful", "yellow")
        self._output(f"{self.INDENT}{line}")

    def check_skipped(self, check: str) -> None:
        """Status line for an overridden check."""
        self._output(f"Skipping {check}...", symbol_type="skip", force=True)

    # General purpose

    def banner(self, title: str) -> None:
        """Bold run banner."""
        self._output(self._colorize(title, "bold"))

    def success(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="success", force=force)

    def error(self, message: str) -> None:
        """Output an error message (always shown, even in quiet mode)."""
        self._output(message, symbol_type="error", err=True, force=True)

    def warning(self, message: str, force: bool = False) -> None:
        self._output(self._colorize(message, "italic"), symbol_type="warning", force=force)

    def info(self, message: str) -> None:
        self._output(message, symbol_type="info")

    def plain(self, message: str, force: bool = False) -> None:
        self._output(message, force=force)

    def summary(
        self,
        total: int,
        passed: int = 0,
        recovered: int = 0,
        failed: int = 0,
        skipped: int = 0,
    ) -> None:
        """Output a one-line summary of profile results.

        Args:
            total: Profiles selected for this run.
            passed: Profiles that passed without intervention.
            recovered: Profiles that passed after an autofix or override.
            failed: Profiles that ended with an unrecovered failure.
            skipped: Profiles skipped by branch rules.
        """
        parts = [f"{total} profile{'s' if total != 1 else ''}"]
        if passed > 0:
            parts.append(f"{passed} passed")
        if recovered > 0:
            parts.append(f"{recovered} recovered")
        if failed > 0:
            parts.append(f"{failed} failed")
        if skipped > 0:
            parts.append(f"{skipped} skipped")

        summary_text = " | ".join(parts)

        if failed > 0:
            self._output(summary_text, symbol_type="error", force=True)
        elif skipped > 0 or recovered > 0:
            self._output(summary_text, symbol_type="warning", force=True)
        else:
            self._output(summary_text, symbol_type="success", force=True)
