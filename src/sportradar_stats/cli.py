#!/usr/bin/env python3
"""
Command-line interface for SportRadar season statistics.

Usage:
    sportradar-stats                      # interactive wizard (same as `run`)
    sportradar-stats run
    sportradar-stats top --competition "Premier League" --kind assists --limit 5
    sportradar-stats top --competition "Serie A" --season "Serie A 23/24"

Configuration comes from the environment or a .env file
(SPORT_RADAR_API_KEY, ALLOWED_COMPETITIONS, ALLOWED_COUNTRIES, ...).
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

import click

from .core.config import Settings, get_settings
from .core.http import ExternalAPIError
from .core.types import StatisticKind
from .prompts import ClickPrompter, PresetChoiceError, PresetPrompter, Prompter
from .providers import get_provider
from .services.wizard import NoOptionsError, Wizard

logger = logging.getLogger("sportradar_stats.cli")

GOODBYE = "Thank you for using SportRadar CLI! Bye!"


async def run_wizard(settings: Settings, prompter: Prompter) -> None:
    """Run the wizard against the live API until the prompter says stop."""
    async with get_provider(settings) as client:
        wizard = Wizard(client, prompter, settings, echo=click.echo)
        await wizard.run()


def _execute(settings: Settings, prompter: Prompter) -> None:
    if not settings.is_configured():
        click.echo("ERROR: SPORT_RADAR_API_KEY environment variable not set", err=True)
        sys.exit(1)

    try:
        asyncio.run(run_wizard(settings, prompter))
    except (ExternalAPIError, NoOptionsError, PresetChoiceError) as e:
        logger.error("Wizard aborted: %s", e)
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, ...)")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]):
    """Browse top goal scorers and assistants from the SportRadar API."""
    settings = get_settings()
    settings.setup_logging(log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_obj
def run(settings: Settings):
    """Pick sport, competition, season and statistic interactively."""
    _execute(settings, ClickPrompter())
    click.secho(f"\n{GOODBYE}", fg="yellow", bold=True)


@cli.command()
@click.option("--competition", required=True, help="Competition name, e.g. 'Premier League'")
@click.option("--season", default=None, help="Season name (default: newest enabled season)")
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in StatisticKind]),
    default=StatisticKind.GOAL_SCORERS.value,
    show_default=True,
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Players to show")
@click.pass_obj
def top(
    settings: Settings,
    competition: str,
    season: Optional[str],
    kind: str,
    limit: Optional[int],
):
    """Print one ranking without prompting."""
    prompter = PresetPrompter(
        competition=competition,
        season=season,
        kind=StatisticKind(kind),
        limit=limit or settings.display_limit,
    )
    _execute(settings, prompter)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
