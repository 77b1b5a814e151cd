"""
End-to-end tests for the selection wizard, with an in-memory client and
scripted answers instead of the network and a terminal.
"""

from __future__ import annotations

import pytest
from conftest import (
    SOCCER,
    FakeSportRadar,
    ScriptedPrompter,
    competition,
    event,
    season,
    stats_response,
    team,
)

from sportradar_stats.core.http import ExternalAPIError
from sportradar_stats.core.types import StatisticKind
from sportradar_stats.services.session import SessionState, WizardStateError, WizardStep
from sportradar_stats.services.wizard import NoOptionsError, Wizard

PREMIER = competition("sr:competition:17", "Premier League", "England")
SERIE_A = competition("sr:competition:23", "Serie A", "Italy")
LIGA_MX = competition("sr:competition:27", "Liga MX", "Mexico")

ARSENAL = team("sr:competitor:42", "Arsenal")
CHELSEA = team("sr:competitor:38", "Chelsea")


def premier_league_client(**overrides) -> FakeSportRadar:
    options = dict(
        competitions=[PREMIER, SERIE_A, LIGA_MX],
        seasons=[
            season("s21", "Premier League 21/22"),
            season("s23", "Premier League 23/24"),
            season("s22", "Premier League 22/23", disabled=True),
        ],
        events=[event("e1", ARSENAL, CHELSEA), event("e2", CHELSEA, ARSENAL)],
        statistics={
            ARSENAL.id: stats_response(
                ARSENAL.id, ARSENAL.name, [("saka", "Saka", 16, 9), ("odegaard", "Odegaard", 8, 10)]
            ),
            CHELSEA.id: stats_response(
                CHELSEA.id, CHELSEA.name, [("palmer", "Palmer", 22, 11), ("jackson", "Jackson", 14, 5)]
            ),
        },
    )
    options.update(overrides)
    return FakeSportRadar(**options)


class TestWizardRun:
    @pytest.mark.asyncio
    async def test_end_to_end_goal_scorers(self, settings):
        client = premier_league_client()
        prompter = ScriptedPrompter(
            choices=["Soccer", "Premier League", "Premier League 23/24", StatisticKind.GOAL_SCORERS],
            numbers=[3],
            confirmations=[False],
        )
        lines: list[str] = []

        wizard = Wizard(client, prompter, settings, echo=lines.append)
        await wizard.run()

        assert lines == [
            "1. Palmer (Chelsea) - 22 goals",
            "2. Saka (Arsenal) - 16 goals",
            "3. Jackson (Chelsea) - 14 goals",
        ]
        assert wizard.session.step is WizardStep.DISPLAYED

    @pytest.mark.asyncio
    async def test_offered_options_are_filtered_and_sorted(self, settings):
        client = premier_league_client()
        prompter = ScriptedPrompter(
            choices=["Soccer", "Premier League", "Premier League 23/24", StatisticKind.ASSISTANTS],
            numbers=[1],
            confirmations=[False],
        )

        await Wizard(client, prompter, settings, echo=lambda line: None).run()

        offered = dict(prompter.offered)
        assert set(offered["Select a competition:"]) == {PREMIER, SERIE_A}
        assert [s.name for s in offered["Select a season:"]] == [
            "Premier League 23/24",
            "Premier League 21/22",
        ]
        assert offered["What statistics do you want to see?"] == list(StatisticKind)

    @pytest.mark.asyncio
    async def test_continue_resets_and_refetches(self, settings):
        client = premier_league_client()
        prompter = ScriptedPrompter(
            choices=[
                "Soccer", "Premier League", "Premier League 23/24", StatisticKind.GOAL_SCORERS,
                "Soccer", "Premier League", "Premier League 21/22", StatisticKind.ASSISTANTS,
            ],
            numbers=[1, 1],
            confirmations=[True, False],
        )
        lines: list[str] = []

        wizard = Wizard(client, prompter, settings, echo=lines.append)
        await wizard.run()

        assert lines == ["1. Palmer (Chelsea) - 22 goals", "1. Palmer (Chelsea) - 11 assists"]
        assert [call[0] for call in client.calls].count("competitions") == 2
        assert [call[0] for call in client.calls].count("seasons") == 2
        assert ("schedules", "s21") in client.calls
        assert wizard.session.sports == {SOCCER}

    @pytest.mark.asyncio
    async def test_partial_statistics_failure_still_ranks(self, settings):
        client = premier_league_client(failing={CHELSEA.id})
        prompter = ScriptedPrompter(
            choices=["Soccer", "Premier League", "Premier League 23/24", StatisticKind.GOAL_SCORERS],
            numbers=[10],
            confirmations=[False],
        )
        lines: list[str] = []

        await Wizard(client, prompter, settings, echo=lines.append).run()

        assert lines == ["1. Saka (Arsenal) - 16 goals", "2. Odegaard (Arsenal) - 8 goals"]

    @pytest.mark.asyncio
    async def test_required_fetch_failure_aborts(self, settings):
        class NoCompetitions(FakeSportRadar):
            async def fetch_competitions(self, sport):
                raise ExternalAPIError("HTTP 403 for competitions", status_code=403)

        prompter = ScriptedPrompter(choices=["Soccer"])

        with pytest.raises(ExternalAPIError):
            await Wizard(NoCompetitions(), prompter, settings).run()

    @pytest.mark.asyncio
    async def test_no_allowed_competitions(self, settings):
        client = premier_league_client(competitions=[LIGA_MX])
        prompter = ScriptedPrompter(choices=["Soccer"])

        with pytest.raises(NoOptionsError, match="No allow-listed competitions"):
            await Wizard(client, prompter, settings).run()

    @pytest.mark.asyncio
    async def test_no_statistics_message(self, settings):
        client = premier_league_client(events=[])
        prompter = ScriptedPrompter(
            choices=["Soccer", "Serie A", "Premier League 23/24", StatisticKind.GOAL_SCORERS],
            numbers=[5],
            confirmations=[False],
        )
        lines: list[str] = []

        await Wizard(client, prompter, settings, echo=lines.append).run()

        assert lines == ["No player statistics available for this season."]


class TestWizardSteps:
    @pytest.mark.asyncio
    async def test_advance_moves_one_step(self, settings):
        wizard = Wizard(
            premier_league_client(), ScriptedPrompter(choices=["Soccer"]), settings
        )
        assert await wizard.advance() is True
        assert wizard.session.step is WizardStep.SPORT_CHOSEN
        assert wizard.session.sport == SOCCER

    @pytest.mark.asyncio
    async def test_statistics_require_a_season(self, settings):
        session = SessionState()
        session.set_sports([SOCCER])
        session.choose_sport(SOCCER)
        wizard = Wizard(premier_league_client(), ScriptedPrompter(), settings, session=session)

        with pytest.raises(WizardStateError, match="No season selected"):
            await wizard.load_season_statistics()

    def test_ranking_requires_statistic_kind(self, settings):
        wizard = Wizard(premier_league_client(), ScriptedPrompter(), settings)
        with pytest.raises(WizardStateError):
            wizard.ranked_players()

    def test_sport_catalog_is_built_once(self, settings):
        wizard = Wizard(premier_league_client(), ScriptedPrompter(), settings)
        first = wizard.load_sports()
        wizard.session.reset()
        assert wizard.load_sports() is first
