#!/usr/bin/env python3
"""
Boomer Bot MCP Server

An MCP server behind the Oklahoma Sooners fan chatbot. It keeps the OU
video catalog (videos.json) cached in memory, lets the bot search it, and
answers score, ranking, schedule and history questions from ESPN and
CollegeFootballData.

Features:
- Video search over an in-memory catalog refreshed every 15 minutes
- Change detection on refresh (content fingerprint), stale-but-available on failure
- ESPN scoreboard, polls and schedule tools
- CFBD recruiting, stats, standings, records, talent and venue tools
- /health and / status routes for the hosting platform
"""

import asyncio
import json
import logging
import sys
import time
from datetime import datetime
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse

from api import cfbd, espn
from core import (
    CacheStore,
    RefreshScheduler,
    SearchEngine,
    format_metrics_report,
    get_refresh_metrics,
    make_fetcher,
)
from models import ResponseFormat, load_settings
from utils import normalize_query
from utils.formatting import (
    format_game_results,
    format_matchup,
    format_player_stats,
    format_plays,
    format_poll,
    format_recruiting,
    format_schedule,
    format_score,
    format_scoreboard,
    format_standings,
    format_talent,
    format_team_rankings,
    format_team_records,
    format_team_stats,
    format_venue,
    format_video_results,
    video_to_dict,
)

logger = logging.getLogger("boomer_bot_mcp")

# Load environment variables from .env file
load_dotenv()

SETTINGS = load_settings()

DEFAULT_TEAM = "Oklahoma"
SERVICE_NAME = "Unified Boomer Bot MCP"
STARTED_AT = time.time()

# ══════════════════════════════════════════════════════════════════════════════
# Video Catalog
# ══════════════════════════════════════════════════════════════════════════════

video_store = CacheStore()
video_search = SearchEngine(video_store, limit=SETTINGS.search_limit)
refresh_scheduler = RefreshScheduler(
    video_store,
    make_fetcher(SETTINGS.videos_url, timeout=SETTINGS.fetch_timeout),
    SETTINGS.refresh_interval_seconds,
)

# Initialize MCP server
mcp = FastMCP(
    "boomer_bot_mcp",
    host=SETTINGS.host,
    port=SETTINGS.port,
    log_level=SETTINGS.log_level,
)


def _read_only(title: str, open_world: bool = True) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=open_world,
    )


def _team(team: Optional[str]) -> str:
    return normalize_query(team or "") or DEFAULT_TEAM


def _year(year: Optional[int]) -> int:
    return year or datetime.now().year


# ══════════════════════════════════════════════════════════════════════════════
# Video Tools
# ══════════════════════════════════════════════════════════════════════════════


@mcp.tool(
    name="search_videos",
    annotations=_read_only("Search OU Sooners Videos", open_world=False),
)
async def search_videos(
    query: str, response_format: ResponseFormat = ResponseFormat.MARKDOWN
) -> str:
    """
    Search the OU Sooners video library - returns embedded video players.

    Matches the query (case-insensitive) against video titles, descriptions
    and channel names. Use 1-3 keywords: a player, an opponent, a season.

    Args:
        query (str): Search keywords, e.g. "Baker Mayfield" or "Texas"
        response_format (str): 'markdown' (default, embedded players) or 'json'

    Returns:
        str: Matching videos, at most a handful, in library order

    Examples:
        - "Show me Baker Mayfield highlights": query="Baker Mayfield"
        - "OU vs Texas videos": query="Texas"
    """
    logger.info(f"Video search: {query!r}")
    videos = video_search.search(query)

    if response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "query": query,
                "count": len(videos),
                "videos": [video_to_dict(v) for v in videos],
            },
            indent=2,
        )
    return format_video_results(query, videos)


@mcp.tool(
    name="get_cache_status",
    annotations=_read_only("Get Video Cache Status", open_world=False),
)
async def get_cache_status() -> str:
    """
    Report the state of the in-memory video catalog.

    Returns:
        str: JSON with video count, snapshot version, fingerprint,
            last update time and refresh statistics
    """
    snapshot = video_store.current()
    return json.dumps(
        {
            "videos": len(snapshot),
            "snapshot_version": snapshot.version,
            "fingerprint": snapshot.fingerprint,
            "last_updated": snapshot.updated_at.isoformat()
            if snapshot.updated_at
            else None,
            "refresh_running": refresh_scheduler.running,
            "refresh_interval_seconds": refresh_scheduler.interval_seconds,
            "refresh": get_refresh_metrics().summary(),
        },
        indent=2,
    )


@mcp.tool(
    name="get_performance_metrics",
    annotations=_read_only("Get Performance Metrics", open_world=False),
)
async def get_performance_metrics() -> str:
    """
    Get search and catalog refresh metrics.

    Returns:
        str: Markdown report with search counts, timings and refresh outcomes
    """
    return format_metrics_report()


# ══════════════════════════════════════════════════════════════════════════════
# ESPN Tools
# ══════════════════════════════════════════════════════════════════════════════


@mcp.tool(name="get_score", annotations=_read_only("Get Game Score"))
async def get_score(team: str = DEFAULT_TEAM) -> str:
    """
    Get current or recent game score for a team.

    Args:
        team (str): Team name (default: Oklahoma)
    """
    team = _team(team)
    logger.info(f"Get score: {team}")
    return format_score(await espn.get_scoreboard_games(), team)


@mcp.tool(name="get_scoreboard", annotations=_read_only("Get Scoreboard"))
async def get_scoreboard() -> str:
    """Get today's college football scoreboard - all games."""
    logger.info("Get scoreboard")
    games = await espn.get_scoreboard_games()
    return format_scoreboard(games, "College Football Scoreboard", limit=10)


@mcp.tool(name="get_ncaa_scoreboard", annotations=_read_only("Get NCAA Scoreboard"))
async def get_ncaa_scoreboard() -> str:
    """Get the wider NCAA football scoreboard (scores only)."""
    logger.info("Get NCAA scoreboard")
    games = await espn.get_scoreboard_games()
    return format_scoreboard(
        games, "NCAA Football Scoreboard", limit=15, include_status=False
    )


@mcp.tool(name="get_rankings", annotations=_read_only("Get AP Top 25"))
async def get_rankings() -> str:
    """Get current AP Top 25 rankings."""
    logger.info("Get rankings")
    return format_poll(await espn.get_polls(), ["AP Top 25"], "AP Top 25")


@mcp.tool(name="get_ncaa_rankings", annotations=_read_only("Get Coaches Poll"))
async def get_ncaa_rankings() -> str:
    """Get current Coaches Poll Top 25 rankings."""
    logger.info("Get NCAA rankings")
    return format_poll(
        await espn.get_polls(),
        ["USA Today Coaches Poll", "AFCA Coaches Poll"],
        "Coaches Poll Top 25",
    )


@mcp.tool(name="get_schedule", annotations=_read_only("Get Team Schedule"))
async def get_schedule(team: str = DEFAULT_TEAM) -> str:
    """
    Get Oklahoma's game schedule with dates and opponents.

    Args:
        team (str): Team name used to pick the opponent column (default: Oklahoma)
    """
    team = _team(team)
    logger.info(f"Get schedule: {team}")
    return format_schedule(await espn.get_team_schedule(espn.OKLAHOMA_TEAM_ID), team)


# ══════════════════════════════════════════════════════════════════════════════
# CFBD Tools
# ══════════════════════════════════════════════════════════════════════════════


@mcp.tool(name="get_recruiting", annotations=_read_only("Get Recruiting Class"))
async def get_recruiting(team: str = DEFAULT_TEAM, year: Optional[int] = None) -> str:
    """
    Get recruiting class ranking and points.

    Args:
        team (str): Team name (default: Oklahoma)
        year (int): Class year (default: current year)
    """
    team, year = _team(team), _year(year)
    logger.info(f"Get recruiting: {team} {year}")
    return format_recruiting(await cfbd.get_recruiting(team, year), team, year)


@mcp.tool(name="get_team_stats", annotations=_read_only("Get Team Season Stats"))
async def get_team_stats(team: str = DEFAULT_TEAM, year: Optional[int] = None) -> str:
    """
    Get season statistics (yards, touchdowns, etc.).

    Args:
        team (str): Team name (default: Oklahoma)
        year (int): Season (default: current year)
    """
    team, year = _team(team), _year(year)
    logger.info(f"Get team stats: {team} {year}")
    return format_team_stats(await cfbd.get_team_stats(team, year), team, year)


@mcp.tool(name="get_team_matchup", annotations=_read_only("Get Head-to-Head Record"))
async def get_team_matchup(team1: str = DEFAULT_TEAM, team2: str = "Texas") -> str:
    """
    Get head-to-head all-time record (e.g. OU vs Texas).

    Args:
        team1 (str): First team (default: Oklahoma)
        team2 (str): Second team (default: Texas)
    """
    team1 = _team(team1)
    team2 = normalize_query(team2 or "") or "Texas"
    logger.info(f"Get matchup: {team1} vs {team2}")
    return format_matchup(await cfbd.get_team_matchup(team1, team2), team1, team2)


@mcp.tool(
    name="get_conference_standings",
    annotations=_read_only("Get Conference Standings"),
)
async def get_conference_standings(
    conference: str = "Big 12", year: Optional[int] = None
) -> str:
    """
    Get conference standings (e.g. Big 12, SEC).

    Args:
        conference (str): Conference name (default: Big 12)
        year (int): Season (default: current year)
    """
    conference = normalize_query(conference or "") or "Big 12"
    year = _year(year)
    logger.info(f"Get standings: {conference} {year}")
    return format_standings(
        await cfbd.get_standings(conference, year), conference, year
    )


@mcp.tool(name="get_game_stats", annotations=_read_only("Get Game Results"))
async def get_game_stats(team: str = DEFAULT_TEAM, year: Optional[int] = None) -> str:
    """
    Get a season's game-by-game results.

    Args:
        team (str): Team name (default: Oklahoma)
        year (int): Season (default: current year)
    """
    team, year = _team(team), _year(year)
    logger.info(f"Get game stats: {team} {year}")
    return format_game_results(await cfbd.get_game_results(team, year), team, year)


@mcp.tool(name="get_play_by_play", annotations=_read_only("Get Play-by-Play"))
async def get_play_by_play(game_id: Optional[int] = None) -> str:
    """
    Get the opening plays of a game.

    Args:
        game_id (int): CFBD game id (required)
    """
    if not game_id:
        return "Game ID required for play-by-play data."
    logger.info(f"Get play by play: game {game_id}")
    return format_plays(await cfbd.get_plays(game_id))


@mcp.tool(name="get_player_stats", annotations=_read_only("Get Player Season Stats"))
async def get_player_stats(player: str = "Baker Mayfield", year: int = 2017) -> str:
    """
    Get an Oklahoma player's season statistics.

    Args:
        player (str): Player name (default: Baker Mayfield)
        year (int): Season (default: 2017)
    """
    player = normalize_query(player or "") or "Baker Mayfield"
    logger.info(f"Get player stats: {player} {year}")
    rows = await cfbd.get_player_season_stats(DEFAULT_TEAM, year)
    return format_player_stats(rows, player, year)


@mcp.tool(name="get_team_rankings", annotations=_read_only("Get Rankings History"))
async def get_team_rankings(
    team: str = DEFAULT_TEAM, year: Optional[int] = None
) -> str:
    """
    Get a team's week-by-week poll history.

    Args:
        team (str): Team name (default: Oklahoma)
        year (int): Season (default: current year)
    """
    team, year = _team(team), _year(year)
    logger.info(f"Get team rankings: {team} {year}")
    return format_team_rankings(await cfbd.get_team_rankings(team, year), team, year)


@mcp.tool(name="get_team_records", annotations=_read_only("Get Win/Loss Records"))
async def get_team_records(
    team: str = DEFAULT_TEAM,
    start_year: int = 2000,
    end_year: Optional[int] = None,
) -> str:
    """
    Get all-time win/loss records over a span of seasons.

    Args:
        team (str): Team name (default: Oklahoma)
        start_year (int): First season (default: 2000)
        end_year (int): Last season (default: current year)
    """
    team, end_year = _team(team), _year(end_year)
    logger.info(f"Get team records: {team} {start_year}-{end_year}")
    rows = await cfbd.get_team_records(team, start_year, end_year)
    return format_team_records(rows, team, start_year, end_year)


@mcp.tool(name="get_team_talent", annotations=_read_only("Get Talent Composite"))
async def get_team_talent(team: str = DEFAULT_TEAM, year: Optional[int] = None) -> str:
    """
    Get the 247 talent composite rating.

    Args:
        team (str): Team name (default: Oklahoma)
        year (int): Season (default: current year)
    """
    team, year = _team(team), _year(year)
    logger.info(f"Get team talent: {team} {year}")
    return format_talent(await cfbd.get_talent(year), team, year)


@mcp.tool(name="get_venue_info", annotations=_read_only("Get Venue Info"))
async def get_venue_info(venue: str = "Memorial Stadium") -> str:
    """
    Get stadium location, capacity and year built.

    Args:
        venue (str): Venue name or part of it (default: Memorial Stadium)
    """
    venue = normalize_query(venue or "") or "Memorial Stadium"
    logger.info(f"Get venue info: {venue}")
    return format_venue(await cfbd.get_venues(), venue)


# ══════════════════════════════════════════════════════════════════════════════
# Health Routes
# ══════════════════════════════════════════════════════════════════════════════


@mcp.custom_route("/", methods=["GET"])
async def service_status(request: Request) -> JSONResponse:
    snapshot = video_store.current()
    tools = await mcp.list_tools()
    return JSONResponse(
        {
            "status": "ok",
            "service": SERVICE_NAME,
            "tools": len(tools),
            "videos": len(snapshot),
            "snapshot_version": snapshot.version,
            "last_updated": snapshot.updated_at.isoformat()
            if snapshot.updated_at
            else None,
            "uptime_seconds": round(time.time() - STARTED_AT, 1),
        }
    )


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


# ══════════════════════════════════════════════════════════════════════════════
# Main Entry Point
# ══════════════════════════════════════════════════════════════════════════════


def configure_logging(level: str) -> None:
    """Log to stderr; stdout belongs to the stdio transport."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    root.setLevel(level)


def validate_environment():
    """Log the effective configuration on startup."""
    logger.info(f"Videos source: {SETTINGS.videos_url}")
    logger.info(
        f"Refresh every {SETTINGS.refresh_interval_seconds:g}s, "
        f"search limit {SETTINGS.search_limit}"
    )
    if not cfbd.get_api_key():
        logger.warning("CFBD_API_KEY not set; CFBD tools will return no data")


async def serve() -> None:
    """Load the catalog, run the MCP transport, stop refreshing on exit."""
    await refresh_scheduler.start()
    logger.info(f"{SERVICE_NAME} ready with {video_store.record_count()} videos")
    try:
        if SETTINGS.transport == "stdio":
            await mcp.run_stdio_async()
        else:
            await mcp.run_streamable_http_async()
    finally:
        await refresh_scheduler.stop()


def main() -> None:
    configure_logging(SETTINGS.log_level)
    validate_environment()
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
