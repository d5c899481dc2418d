"""Type definitions for checks and their outcomes."""

from dataclasses import dataclass
from enum import Enum


class CheckId(Enum):
    """The fixed vocabulary of checks a profile may list."""

    FMT = "fmt"
    CLIPPY = "clippy"
    TEST = "test"
    CHECK_TESTS = "check_tests"
    CHECK_EXAMPLES = "check_examples"
    CHECK_BENCHES = "check_benches"
    UNUSED_DEPS = "unused_deps"
    SECRETS = "secrets"

    @property
    def label(self) -> str:
        """Human label used in status lines."""
        return _LABELS[self]


_LABELS = {
    CheckId.FMT: "Formatting",
    CheckId.CLIPPY: "Clippy",
    CheckId.TEST: "Tests",
    CheckId.CHECK_TESTS: "Check tests",
    CheckId.CHECK_EXAMPLES: "Check examples",
    CheckId.CHECK_BENCHES: "Check benches",
    CheckId.UNUSED_DEPS: "Unused dependencies",
    CheckId.SECRETS: "Secrets",
}


@dataclass(frozen=True)
class UnknownCheck:
    """A check identifier outside the vocabulary."""

    name: str


def parse_check(name: str) -> CheckId | UnknownCheck:
    """Resolve a configured check name to its vocabulary member."""
    try:
        return CheckId(name)
    except ValueError:
        return UnknownCheck(name)


class ReasonKind(Enum):
    """Why a check run ended in failure."""

    FMT = "fmt"
    CLIPPY = "clippy"
    TEST = "test"
    CHECK_TESTS = "check_tests"
    CHECK_EXAMPLES = "check_examples"
    CHECK_BENCHES = "check_benches"
    UNUSED_DEPS = "unused_deps"
    SECRETS = "secrets"
    INVALID_CHECK = "invalid_check"
    OVERRIDE_CANCELLED = "override_cancelled"

    @classmethod
    def for_check(cls, check: CheckId) -> "ReasonKind":
        return cls(check.value)

    @property
    def check(self) -> CheckId | None:
        """Canonical check for this reason, None for the sentinels."""
        try:
            return CheckId(self.value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Passed:
    """A check, or a whole sequence, completed successfully."""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    """A check failed.

    Attributes:
        reason: What failed. For INVALID_CHECK the offending identifier is
            carried in ``output``.
        output: Captured diagnostic text from the tool.
    """

    reason: ReasonKind
    output: str = ""

    @property
    def ok(self) -> bool:
        return False


Outcome = Passed | Failed


@dataclass(frozen=True)
class ToolOutput:
    """Raw result of an external tool process."""

    success: bool
    stdout: str = ""
    stderr: str = ""

    @property
    def text(self) -> str:
        """stdout followed by stderr, skipping empty streams."""
        return "\n".join(part.rstrip("\n") for part in (self.stdout, self.stderr) if part.strip())
