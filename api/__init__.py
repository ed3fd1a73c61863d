"""
Sports data API integrations.

Async clients for the two upstream APIs behind the non-video tools.
All functions degrade to empty results instead of raising.

Available Sources:
─────────────────────────────────────────────────────────────────────────────
    espn    Live scoreboard, AP / Coaches polls, team schedules (no key)
    cfbd    CollegeFootballData: recruiting, stats, standings, records,
            talent, play-by-play, venues (requires CFBD_API_KEY)

Configuration:
─────────────────────────────────────────────────────────────────────────────
Set API keys in environment variables or .env file:

    CFBD_API_KEY    https://collegefootballdata.com/key
"""

from api import cfbd, espn

__all__ = ["cfbd", "espn"]
