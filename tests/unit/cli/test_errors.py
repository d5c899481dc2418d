"""Tests for CLI error handling module."""

from __future__ import annotations

from preflight.cli.errors import (
    EXIT_CONFIGURATION,
    EXIT_TRANSPORT,
    CLIError,
    ConfigurationError,
    ErrorCategory,
    HookInstallError,
    NotAGitRepositoryError,
    ToolSpawnError,
    handle_exception,
)


class TestErrorCategory:
    """Tests for ErrorCategory enum."""

    def test_categories_exist(self):
        """Test that all expected categories exist."""
        assert ErrorCategory.CONFIGURATION.value == "configuration"
        assert ErrorCategory.TRANSPORT.value == "transport"
        assert ErrorCategory.FILE_SYSTEM.value == "file_system"


class TestCLIError:
    """Tests for base CLIError class."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = CLIError(category=ErrorCategory.CONFIGURATION, message="Something went wrong")
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.message == "Something went wrong"
        assert error.exit_code == 1
        assert error.suggestion is None

    def test_format_without_color(self):
        error = CLIError(
            category=ErrorCategory.CONFIGURATION,
            message="Something went wrong",
            suggestion="Try again",
            details={"key": "value"},
        )
        formatted = error.format(use_color=False)
        assert "Error: Something went wrong" in formatted
        assert "Suggestion: Try again" in formatted
        assert "key: value" in formatted
        assert "\033[" not in formatted

    def test_format_with_color(self):
        error = CLIError(category=ErrorCategory.CONFIGURATION, message="Something went wrong")
        assert "\033[91m" in error.format(use_color=True)

    def test_str_is_plain(self):
        error = CLIError(category=ErrorCategory.CONFIGURATION, message="boom")
        assert str(error) == "Error: boom"


class TestSubclasses:
    """Tests for the specific error types."""

    def test_configuration_error(self):
        error = ConfigurationError("Invalid JSON", config_file="/repo/.preflight.json")
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.exit_code == EXIT_CONFIGURATION
        assert error.details == {"config_file": "/repo/.preflight.json"}
        assert "--config" in error.suggestion

    def test_tool_spawn_error(self):
        error = ToolSpawnError(["cargo", "shear"], "No such file or directory")
        assert error.category == ErrorCategory.TRANSPORT
        assert error.exit_code == EXIT_TRANSPORT
        assert error.message == "Cannot run 'cargo': No such file or directory"
        assert error.details == {"command": "cargo shear"}

    def test_hook_install_error(self):
        error = HookInstallError("Failed to link pre-push", "/repo/.git/hooks/pre-push")
        assert error.category == ErrorCategory.FILE_SYSTEM
        assert error.details == {"hook": "/repo/.git/hooks/pre-push"}

    def test_not_a_git_repository(self):
        error = NotAGitRepositoryError("/tmp/x")
        assert error.message == "Not a git repository: /tmp/x"
        assert "git init" in error.suggestion


class TestHandleException:
    """Tests for handle_exception."""

    def test_cli_error(self):
        message, code = handle_exception(ToolSpawnError(["ripsecrets", "."]), use_color=False)
        assert "Cannot run 'ripsecrets'" in message
        assert code == EXIT_TRANSPORT

    def test_verbose_includes_traceback(self):
        try:
            raise ConfigurationError("broken")
        except ConfigurationError as e:
            message, _ = handle_exception(e, use_color=False, verbose=True)
        assert "Traceback" in message
