"""Unit tests for api/espn.py."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from api import espn
from core.reliability import CircuitState, get_circuit_breaker

SCOREBOARD = {
    "events": [
        {
            "id": "401",
            "date": "2025-10-11T19:30Z",
            "competitions": [
                {
                    "competitors": [
                        {"homeAway": "home", "score": "17", "team": {"displayName": "Texas Longhorns"}},
                        {"homeAway": "away", "score": "34", "team": {"displayName": "Oklahoma Sooners"}},
                    ],
                    "status": {"type": {"detail": "Final"}},
                }
            ],
        },
        {"id": "402", "competitions": []},
    ]
}

SCHEDULE = {
    "events": [
        {
            "id": "501",
            "date": "2025-08-30T23:00Z",
            "competitions": [
                {
                    "competitors": [
                        {"homeAway": "home", "score": {"value": 35.0, "displayValue": "35"}, "team": {"displayName": "Oklahoma Sooners"}},
                        {"homeAway": "away", "score": {"value": 3.0, "displayValue": "3"}, "team": {"displayName": "Illinois State Redbirds"}},
                    ],
                    "status": {"type": {"description": "Final"}},
                }
            ],
        }
    ]
}

RANKINGS = {
    "rankings": [
        {
            "name": "AP Top 25",
            "ranks": [
                {"current": 1, "team": {"displayName": "Oklahoma Sooners"}, "recordSummary": "7-0"},
                {"current": 2, "team": {"name": "Ohio State"}, "recordSummary": "6-1"},
            ],
        }
    ]
}


def _mock_get(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return AsyncMock(return_value=response)


class TestScoreboard:
    @pytest.mark.asyncio
    async def test_normalizes_games(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = _mock_get(SCOREBOARD)
            games = await espn.get_scoreboard_games()

        assert games == [
            {
                "id": "401",
                "date": "2025-10-11T19:30Z",
                "home": "Texas Longhorns",
                "home_score": "17",
                "away": "Oklahoma Sooners",
                "away_score": "34",
                "status": "Final",
            }
        ]

    @pytest.mark.asyncio
    async def test_second_call_is_served_from_cache(self):
        with patch("httpx.AsyncClient") as mock_client:
            get = _mock_get(SCOREBOARD)
            mock_client.return_value.__aenter__.return_value.get = get
            await espn.get_scoreboard_games()
            await espn.get_scoreboard_games()

        assert get.await_count == 1

    @pytest.mark.asyncio
    async def test_network_error_returns_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectTimeout("timed out")
            )
            games = await espn.get_scoreboard_games()

        assert games == []

    @pytest.mark.asyncio
    async def test_repeated_failures_open_circuit(self):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(side_effect=httpx.ConnectError("down"))
            mock_client.return_value.__aenter__.return_value.get = get
            for _ in range(7):
                await espn.get_scoreboard_games()

        assert get.await_count == 5
        assert get_circuit_breaker("espn").state == CircuitState.OPEN


class TestScheduleAndPolls:
    @pytest.mark.asyncio
    async def test_schedule_reads_object_scores(self):
        with patch("httpx.AsyncClient") as mock_client:
            get = _mock_get(SCHEDULE)
            mock_client.return_value.__aenter__.return_value.get = get
            games = await espn.get_team_schedule()

        assert games[0]["home_score"] == "35"
        assert games[0]["away"] == "Illinois State Redbirds"
        assert games[0]["status"] == "Final"
        assert get.await_args.args[0].endswith("/teams/201/schedule")

    @pytest.mark.asyncio
    async def test_polls_by_name(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = _mock_get(RANKINGS)
            polls = await espn.get_polls()

        assert polls["AP Top 25"][0] == {
            "rank": 1,
            "team": "Oklahoma Sooners",
            "record": "7-0",
        }
        assert polls["AP Top 25"][1]["team"] == "Ohio State"
