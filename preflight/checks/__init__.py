"""Check vocabulary, external tool invocation, and sequential execution."""

from .runner import CheckRunner, ToolBackend
from .tools import AUTOFIX_COMMANDS, CHECK_COMMANDS, ToolCommand, ToolRunner
from .types import (
    CheckId,
    Failed,
    Outcome,
    Passed,
    ReasonKind,
    ToolOutput,
    UnknownCheck,
    parse_check,
)

__all__ = [
    # Types
    "CheckId",
    "UnknownCheck",
    "parse_check",
    "ReasonKind",
    "Passed",
    "Failed",
    "Outcome",
    "ToolOutput",
    # Tools
    "ToolCommand",
    "ToolRunner",
    "CHECK_COMMANDS",
    "AUTOFIX_COMMANDS",
    # Runner
    "CheckRunner",
    "ToolBackend",
]
