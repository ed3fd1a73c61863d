"""
CollegeFootballData (CFBD) API.

Historical and season data: recruiting, team stats, standings, records,
talent composite, play-by-play and venues. Every request needs a bearer
token from CFBD_API_KEY; without one the calls are skipped.

API: https://api.collegefootballdata.com
"""

import logging
import os
from typing import Any, Optional

import httpx

from core.reliability import get_circuit_breaker
from utils import get_cache_key, get_cached_result, set_cached_result

__all__ = [
    "fetch",
    "get_api_key",
    "get_recruiting",
    "get_team_stats",
    "get_team_matchup",
    "get_standings",
    "get_game_results",
    "get_plays",
    "get_player_season_stats",
    "get_team_rankings",
    "get_team_records",
    "get_talent",
    "get_venues",
]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_BASE = "https://api.collegefootballdata.com"
API_TIMEOUT = 30.0

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Transport
# ══════════════════════════════════════════════════════════════════════════════


async def _get_json(endpoint: str, params: dict[str, Any], api_key: str) -> Any:
    async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
        response = await client.get(
            f"{API_BASE}{endpoint}",
            params=params,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
        )
        response.raise_for_status()
        return response.json()


def get_api_key() -> Optional[str]:
    """Current CFBD key, read from the environment on every call."""
    return os.getenv("CFBD_API_KEY") or None


async def fetch(endpoint: str, **params) -> Optional[Any]:
    """
    GET a CFBD endpoint.

    Args:
        endpoint: Path such as "/recruiting/teams"
        **params: Query parameters; None values are dropped

    Returns:
        Decoded JSON, or None when the key is missing, the request
        failed or the CFBD circuit is open
    """
    api_key = get_api_key()
    if not api_key:
        logger.debug("CFBD skipped: CFBD_API_KEY not set")
        return None

    params = {k: v for k, v in params.items() if v is not None}
    key = get_cache_key("cfbd", endpoint, **params)
    cached = get_cached_result(key)
    if cached is not None:
        return cached

    data = await get_circuit_breaker("cfbd").call(_get_json, endpoint, params, api_key)
    if data is not None:
        set_cached_result(key, data)
    return data


def _as_list(data: Any) -> list[Any]:
    return data if isinstance(data, list) else []


# ══════════════════════════════════════════════════════════════════════════════
# Endpoints
# ══════════════════════════════════════════════════════════════════════════════


async def get_recruiting(team: str, year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/recruiting/teams", year=year, team=team))


async def get_team_stats(team: str, year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/stats/season", year=year, team=team))


async def get_team_matchup(team1: str, team2: str) -> Optional[dict[str, Any]]:
    data = await fetch("/teams/matchup", team1=team1, team2=team2)
    return data if isinstance(data, dict) else None


async def get_standings(conference: str, year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/standings", year=year, conference=conference))


async def get_game_results(team: str, year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/games/teams", year=year, team=team))


async def get_plays(game_id: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/plays", gameId=game_id))


async def get_player_season_stats(team: str, year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/stats/player/season", year=year, team=team))


async def get_team_rankings(team: str, year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/rankings", year=year, team=team))


async def get_team_records(
    team: str, start_year: int, end_year: int
) -> list[dict[str, Any]]:
    return _as_list(
        await fetch("/records", team=team, startYear=start_year, endYear=end_year)
    )


async def get_talent(year: int) -> list[dict[str, Any]]:
    return _as_list(await fetch("/talent", year=year))


async def get_venues() -> list[dict[str, Any]]:
    return _as_list(await fetch("/venues"))
