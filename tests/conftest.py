"""
Shared fixtures for the preflight test suite.

Provides test fixtures for:
- A scripted tool backend standing in for cargo/ripsecrets
- A scripted prompter standing in for the terminal
- Capturing OutputManager
- Temporary project directories and global config isolation
- Logger handler cleanup between tests
"""

import logging
from collections import deque
from io import StringIO
from pathlib import Path

import pytest

from preflight.checks.types import CheckId, ToolOutput
from preflight.cli.output import OutputConfig, OutputManager
from preflight.cli.prompts import PromptCancelled
from preflight.preflight_logging import LOGGER_NAME

# ---------------------------------------------------------------------------
# Tool backend
# ---------------------------------------------------------------------------


class FakeToolRunner:
    """Tool backend whose results are scripted per check.

    ``checks`` maps a check id value to a list of results consumed in order;
    the last result repeats once the list runs out. A bool is shorthand for
    ToolOutput(success=bool). Checks without a script pass.
    """

    def __init__(self, checks=None, fixes=None, fixable=("fmt", "clippy")):
        self.checks = {k: list(v) for k, v in (checks or {}).items()}
        self.fixes = {k: list(v) for k, v in (fixes or {}).items()}
        self.fixable = set(fixable)
        self.calls: list[tuple[str, str]] = []

    @staticmethod
    def _next(script: list, default: ToolOutput) -> ToolOutput:
        if not script:
            return default
        result = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(result, bool):
            return ToolOutput(success=result, stderr="" if result else "tool failed")
        return result

    def spawn_check(self, check: CheckId) -> ToolOutput:
        self.calls.append(("check", check.value))
        return self._next(self.checks.get(check.value, []), ToolOutput(success=True))

    def supports_autofix(self, check: CheckId) -> bool:
        return check.value in self.fixable

    def spawn_autofix(self, check: CheckId) -> ToolOutput:
        self.calls.append(("fix", check.value))
        return self._next(self.fixes.get(check.value, []), ToolOutput(success=True))

    @property
    def check_calls(self) -> list[str]:
        return [name for kind, name in self.calls if kind == "check"]

    @property
    def fix_calls(self) -> list[str]:
        return [name for kind, name in self.calls if kind == "fix"]


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Prompter that answers from a queue.

    Each answer is a bool, or PromptCancelled to simulate a dismissed
    prompt. Asked questions are recorded in ``asked``.
    """

    def __init__(self, *answers):
        self.answers = deque(answers)
        self.asked: list[str] = []

    def confirm(self, message, default=False, help_text=None):
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        answer = self.answers.popleft()
        if answer is PromptCancelled or isinstance(answer, PromptCancelled):
            raise PromptCancelled(message)
        return answer


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@pytest.fixture()
def output() -> OutputManager:
    """OutputManager writing plain text to in-memory streams."""
    return OutputManager(OutputConfig(use_color=False, stream=StringIO(), err_stream=StringIO()))


@pytest.fixture()
def tools() -> FakeToolRunner:
    return FakeToolRunner()


@pytest.fixture()
def make_tools():
    """Factory for FakeToolRunner with scripted results."""
    return FakeToolRunner


@pytest.fixture()
def make_prompter():
    """Factory for ScriptedPrompter with queued answers."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


@pytest.fixture()
def project_dir(tmp_path) -> Path:
    """Empty project directory."""
    path = tmp_path / "crate"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path, monkeypatch) -> Path:
    """Point the global config at a temp file so tests never read ~/.preflight."""
    path = tmp_path / "global" / "config.json"
    monkeypatch.setenv("PREFLIGHT_GLOBAL_CONFIG", str(path))
    return path


@pytest.fixture(autouse=True)
def reset_preflight_logger():
    """Drop handlers installed by setup_logging so streams never outlive a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
