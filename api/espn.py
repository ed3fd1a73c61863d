"""
ESPN college football site API.

Public, unauthenticated JSON endpoints for the live scoreboard, the
weekly polls and team schedules. Responses are normalized into flat
dicts so the formatting layer never touches ESPN's nesting.

API: https://site.api.espn.com/apis/site/v2/sports/football/college-football
"""

import logging
from typing import Any, Optional

import httpx

from core.reliability import get_circuit_breaker
from utils import get_cache_key, get_cached_result, set_cached_result

__all__ = [
    "fetch",
    "get_scoreboard_games",
    "get_polls",
    "get_team_schedule",
    "OKLAHOMA_TEAM_ID",
]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_BASE = "https://site.api.espn.com/apis/site/v2/sports/football/college-football"
API_TIMEOUT = 30.0
OKLAHOMA_TEAM_ID = "201"

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Transport
# ══════════════════════════════════════════════════════════════════════════════


async def _get_json(endpoint: str) -> Any:
    async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
        response = await client.get(f"{API_BASE}{endpoint}")
        response.raise_for_status()
        return response.json()


async def fetch(endpoint: str) -> Optional[Any]:
    """
    GET an ESPN endpoint.

    Returns:
        Decoded JSON, or None when the request failed or the
        circuit for ESPN is open
    """
    key = get_cache_key("espn", endpoint)
    cached = get_cached_result(key)
    if cached is not None:
        return cached

    data = await get_circuit_breaker("espn").call(_get_json, endpoint)
    if data is not None:
        set_cached_result(key, data)
    return data


# ══════════════════════════════════════════════════════════════════════════════
# Normalization
# ══════════════════════════════════════════════════════════════════════════════


def _team_name(competitor: dict[str, Any]) -> str:
    team = competitor.get("team") or {}
    return team.get("displayName") or team.get("name") or "TBD"


def _score(competitor: dict[str, Any]) -> str:
    # Scoreboard gives "24", schedule gives {"value": 24.0, "displayValue": "24"}
    score = competitor.get("score")
    if isinstance(score, dict):
        return str(score.get("displayValue", ""))
    return "" if score is None else str(score)


def _normalize_event(event: dict[str, Any]) -> Optional[dict[str, Any]]:
    competitions = event.get("competitions") or []
    if not competitions:
        return None

    competition = competitions[0]
    competitors = competition.get("competitors") or []
    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    if home is None or away is None:
        return None

    status = (competition.get("status") or event.get("status") or {}).get("type") or {}
    return {
        "id": str(event.get("id", "")),
        "date": event.get("date", ""),
        "home": _team_name(home),
        "home_score": _score(home),
        "away": _team_name(away),
        "away_score": _score(away),
        "status": status.get("detail") or status.get("description") or "",
    }


# ══════════════════════════════════════════════════════════════════════════════
# Endpoints
# ══════════════════════════════════════════════════════════════════════════════


async def get_scoreboard_games() -> list[dict[str, Any]]:
    """
    Current college football scoreboard.

    Returns:
        List of games with home, away, home_score, away_score, status, date
    """
    data = await fetch("/scoreboard")
    if not data:
        return []

    games = []
    for event in data.get("events") or []:
        game = _normalize_event(event)
        if game:
            games.append(game)
    return games


async def get_polls() -> dict[str, list[dict[str, Any]]]:
    """
    Current polls keyed by poll name (e.g. "AP Top 25").

    Each entry has rank, team and record.
    """
    data = await fetch("/rankings")
    if not data:
        return {}

    polls = {}
    for poll in data.get("rankings") or []:
        polls[poll.get("name", "")] = [
            {
                "rank": entry.get("current"),
                "team": _team_name(entry),
                "record": entry.get("recordSummary", ""),
            }
            for entry in poll.get("ranks") or []
        ]
    return polls


async def get_team_schedule(team_id: str = OKLAHOMA_TEAM_ID) -> list[dict[str, Any]]:
    """Season schedule for an ESPN team id, normalized like the scoreboard."""
    data = await fetch(f"/teams/{team_id}/schedule")
    if not data:
        return []

    games = []
    for event in data.get("events") or []:
        game = _normalize_event(event)
        if game:
            games.append(game)
    return games
