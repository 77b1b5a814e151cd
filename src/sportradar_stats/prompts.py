"""
Terminal prompts for the wizard.

The wizard only talks to the Prompter protocol; ClickPrompter is the
terminal implementation. Input validation (positive numbers, valid option
indices) happens here, at the prompt, so the wizard only ever sees valid
choices.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, TypeVar

import click

from .core.models import Competition, Season
from .core.types import StatisticKind

T = TypeVar("T")


class Prompter(Protocol):
    def select_one(self, message: str, options: Sequence[T]) -> T: ...

    def select_number(self, message: str) -> int: ...

    def confirm(self, message: str) -> bool: ...


def _title(message: str) -> str:
    return click.style(message, fg="green", bold=True)


class ClickPrompter:
    """Numbered-menu prompts on top of click."""

    def select_one(self, message: str, options: Sequence[T]) -> T:
        if not options:
            raise ValueError(f"No options to choose from for: {message}")

        click.echo(_title(message))
        for position, option in enumerate(options, start=1):
            click.echo(f"  {position:>2}. {option}")

        choice = click.prompt(
            "Enter a number",
            type=click.IntRange(1, len(options)),
        )
        return options[choice - 1]

    def select_number(self, message: str) -> int:
        return click.prompt(
            _title(message),
            type=click.IntRange(min=1),
        )

    def confirm(self, message: str) -> bool:
        return click.confirm(_title(message), default=True)


class PresetChoiceError(LookupError):
    """A preset answer does not match any offered option."""


class PresetPrompter:
    """
    Answers the wizard from fixed choices, for non-interactive runs.

    Competitions and seasons are matched by name (or display text); the
    season defaults to the first offered, which is the newest. Every other
    selection takes the first option, and the wizard stops after one ranking.
    """

    def __init__(
        self,
        competition: str,
        kind: StatisticKind,
        limit: int,
        season: Optional[str] = None,
    ):
        self.competition = competition
        self.season = season
        self.kind = kind
        self.limit = limit

    def select_one(self, message: str, options: Sequence[T]) -> T:
        first = options[0]
        if isinstance(first, Competition):
            return self._match(options, self.competition, "Competition")
        if isinstance(first, Season) and self.season is not None:
            return self._match(options, self.season, "Season")
        if isinstance(first, StatisticKind):
            return self.kind
        return first

    def select_number(self, message: str) -> int:
        return self.limit

    def confirm(self, message: str) -> bool:
        return False

    @staticmethod
    def _match(options: Sequence[T], wanted: str, what: str) -> T:
        for option in options:
            if wanted in (getattr(option, "name", None), str(option)):
                return option
        available = ", ".join(str(option) for option in options)
        raise PresetChoiceError(f"{what} '{wanted}' is not available. Choose from: {available}")
