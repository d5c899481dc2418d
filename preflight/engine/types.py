"""Type definitions for the orchestration engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..checks.types import Failed
from ..cli.errors import EXIT_CHECK_FAILED
from ..config.models import Profile


@dataclass(frozen=True)
class ExecutionCursor:
    """Where a (resumed) run of a profile begins."""

    profile: Profile
    index: int = 0

    def resume_at(self, index: int) -> "ExecutionCursor":
        return ExecutionCursor(self.profile, index)


class RecoveryAction(Enum):
    """What the recovery controller decided after a failure."""

    RETRY = "retry"  # Fix applied, run the same check again
    SKIP = "skip"  # Override accepted, continue with the next check
    TERMINATE = "terminate"


@dataclass(frozen=True)
class RecoveryDecision:
    """Outcome of one pass through the recovery state machine.

    Attributes:
        action: Retry, skip, or terminate.
        resume_index: Where to resume for RETRY/SKIP; None on TERMINATE.
        failure: The failure to surface when terminating.
    """

    action: RecoveryAction
    resume_index: int | None = None
    failure: Failed | None = None

    @classmethod
    def retry(cls, index: int) -> "RecoveryDecision":
        return cls(RecoveryAction.RETRY, resume_index=index)

    @classmethod
    def skip(cls, index: int) -> "RecoveryDecision":
        return cls(RecoveryAction.SKIP, resume_index=index + 1)

    @classmethod
    def terminate(cls, failure: Failed) -> "RecoveryDecision":
        return cls(RecoveryAction.TERMINATE, failure=failure)


class ProfileStatus(Enum):
    """Terminal state of one profile in a run."""

    PASSED = "passed"
    RECOVERED = "recovered"  # Reached the end after a fix or override
    SKIPPED_BRANCH = "skipped_branch"
    FAILED = "failed"


@dataclass
class ProfileReport:
    """What happened to one profile."""

    position: int
    profile: Profile
    status: ProfileStatus = ProfileStatus.PASSED
    fixed: list[str] = field(default_factory=list)
    overridden: list[str] = field(default_factory=list)
    failure: Failed | None = None

    @property
    def failed(self) -> bool:
        return self.status is ProfileStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "run_when": list(self.profile.run_when),
            "checks": list(self.profile.checks),
            "status": self.status.value,
            "fixed": list(self.fixed),
            "overridden": list(self.overridden),
            "failure": (
                {"reason": self.failure.reason.value, "output": self.failure.output}
                if self.failure
                else None
            ),
        }


@dataclass
class RunReport:
    """Aggregate result of executing a profile set for one hook."""

    hook: str
    profiles: list[ProfileReport] = field(default_factory=list)

    def add(self, report: ProfileReport) -> None:
        self.profiles.append(report)

    def count(self, status: ProfileStatus) -> int:
        return sum(1 for p in self.profiles if p.status is status)

    @property
    def success(self) -> bool:
        """True when no profile ended with an unrecovered failure."""
        return not any(p.failed for p in self.profiles)

    @property
    def last_failure(self) -> Failed | None:
        for report in reversed(self.profiles):
            if report.failed:
                return report.failure
        return None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else EXIT_CHECK_FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "hook": self.hook,
            "profiles": [p.to_dict() for p in self.profiles],
            "summary": {
                "total": len(self.profiles),
                "passed": self.count(ProfileStatus.PASSED),
                "recovered": self.count(ProfileStatus.RECOVERED),
                "skipped": self.count(ProfileStatus.SKIPPED_BRANCH),
                "failed": self.count(ProfileStatus.FAILED),
                "success": self.success,
            },
        }
