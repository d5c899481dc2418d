"""Interactive prompting, injected wherever a decision is needed."""

from __future__ import annotations

from typing import Protocol

import click


class PromptCancelled(Exception):
    """The user dismissed a prompt (Ctrl-C, EOF, no terminal)."""


class Prompter(Protocol):
    """Yes/no questions asked during recovery."""

    def confirm(self, message: str, default: bool = False, help_text: str | None = None) -> bool:
        """Ask a yes/no question.

        Raises:
            PromptCancelled: If the prompt was dismissed.
        """
        ...


class ClickPrompter:
    """Prompter backed by click's terminal prompts."""

    def confirm(self, message: str, default: bool = False, help_text: str | None = None) -> bool:
        if help_text:
            click.secho(help_text, dim=True, err=True)
        try:
            return click.confirm(message, default=default, err=True)
        except click.Abort as e:
            raise PromptCancelled(message) from e

    def select(self, message: str, choices: list[str], default: str | None = None) -> str:
        """Pick exactly one of ``choices``."""
        try:
            return click.prompt(
                message,
                type=click.Choice(choices),
                default=default or choices[0],
                err=True,
            )
        except click.Abort as e:
            raise PromptCancelled(message) from e

    def multi_select(self, message: str, choices: list[str], default: list[str] | None = None) -> list[str]:
        """Pick any subset of ``choices`` as a comma or space separated list.

        Order follows the user's input, duplicates dropped.
        """
        click.echo(f"Options: {', '.join(choices)}", err=True)

        def parse(value: str) -> list[str]:
            picked: list[str] = []
            for item in value.replace(",", " ").split():
                if item not in choices:
                    raise click.BadParameter(f"'{item}' is not one of: {', '.join(choices)}")
                if item not in picked:
                    picked.append(item)
            return picked

        try:
            raw = click.prompt(
                message,
                default=" ".join(default) if default else "",
                show_default=bool(default),
                value_proc=parse,
                err=True,
            )
        except click.Abort as e:
            raise PromptCancelled(message) from e
        return raw if isinstance(raw, list) else parse(raw)

    def text(self, message: str, default: str = "", help_text: str | None = None) -> str:
        if help_text:
            click.secho(help_text, dim=True, err=True)
        try:
            return click.prompt(message, default=default, show_default=bool(default), err=True)
        except click.Abort as e:
            raise PromptCancelled(message) from e
