"""Rendering of the active checklist for --checklist."""

from __future__ import annotations

import click

from ..config.loader import ConfigScope
from ..config.models import Profile, ProfileSet


def display_list(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def display_checks(items: list[str]) -> str:
    return "\n".join(f"[ ] {item}" for item in items)


def profile_rows(profile: Profile) -> list[tuple[str, str]]:
    """Field name and display value for each row of a profile table."""
    return [
        ("run_when", display_list(profile.run_when)),
        ("branches", display_list(profile.branches) or "(any)"),
        ("checks", display_checks(profile.checks)),
        ("autofix", str(profile.autofix).lower()),
        ("override", str(profile.override).lower()),
    ]


def render_profile(profile: Profile) -> str:
    """A boxed two-column table for one profile."""
    rows = profile_rows(profile)
    key_width = max(len(key) for key, _ in rows)
    value_width = max(
        (len(line) for _, value in rows for line in value.splitlines()),
        default=0,
    )
    border = f"+{'-' * (key_width + 2)}+{'-' * (value_width + 2)}+"

    lines = [border]
    for key, value in rows:
        value_lines = value.splitlines() or [""]
        for offset, value_line in enumerate(value_lines):
            label = key if offset == 0 else ""
            lines.append(f"| {label.ljust(key_width)} | {value_line.ljust(value_width)} |")
        lines.append(border)
    return "\n".join(lines)


def render_checklist(profile_set: ProfileSet, scope: ConfigScope) -> str:
    """Full checklist text: a header naming the scope, then one table per profile."""
    title = click.style("Current Active Preflight Checklist", bold=True)
    parts = [f"{title} ({scope.value.capitalize()}):"]
    if not profile_set.profiles:
        parts.append("No profiles configured.")
    for profile in profile_set.profiles:
        parts.append(render_profile(profile))
    return "\n".join(parts)
