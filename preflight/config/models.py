"""Profile configuration models.

A profile names which checks run, in which order, for which git hooks and
branches, and how a failure may be recovered.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..preflight_logging import get_logger

logger = get_logger()

# Trigger names a hook can be installed for
KNOWN_TRIGGERS = ("commit", "push")

# Trigger used when preflight is run by hand; selects every profile
RUN_ALL_TRIGGER = "preflight"


class Profile(BaseModel):
    """One configuration unit of checks, triggers, branch scope and recovery flags."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    run_when: list[str] = Field(
        default_factory=lambda: ["push"],
        description="Hook triggers that fire this profile",
    )
    branches: list[str] = Field(
        default_factory=list,
        description="Branches this profile applies to; empty means any branch",
    )
    checks: list[str] = Field(
        default_factory=lambda: ["fmt", "test"],
        min_length=1,
        description="Checks to run, in execution order",
    )
    autofix: bool = Field(default=True, description="Offer to auto-repair failing checks")
    override: bool = Field(
        default=False,
        validation_alias=AliasChoices("override", "over_ride"),
        description="Allow the user to skip a failing check",
    )

    @field_validator("run_when")
    @classmethod
    def warn_unknown_triggers(cls, value: list[str]) -> list[str]:
        unknown = [trigger for trigger in value if trigger not in KNOWN_TRIGGERS]
        if unknown:
            logger.warning(
                f"Invalid hook(s) in config: {', '.join(unknown)} "
                f"(expected one of: {', '.join(KNOWN_TRIGGERS)})"
            )
        return value

    def fires_for(self, hook: str) -> bool:
        """Whether this profile runs for a hook invocation."""
        return hook == RUN_ALL_TRIGGER or hook in self.run_when


class ProfileSet(BaseModel):
    """Ordered collection of profiles, loaded once per invocation."""

    model_config = ConfigDict(frozen=True)

    preflight: list[Profile] = Field(default_factory=lambda: [Profile()])

    @property
    def profiles(self) -> list[Profile]:
        return self.preflight

    def triggers(self) -> list[str]:
        """Distinct known triggers used across all profiles, in first-seen order."""
        seen: list[str] = []
        for profile in self.preflight:
            for trigger in profile.run_when:
                if trigger in KNOWN_TRIGGERS and trigger not in seen:
                    seen.append(trigger)
        return seen
