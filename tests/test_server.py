"""Tests for the MCP tool boundary and health routes in boomer_bot_mcp.py."""

import json
import logging
from unittest.mock import AsyncMock, patch

import pytest
from mcp.server.fastmcp.exceptions import ToolError
from starlette.testclient import TestClient

import boomer_bot_mcp
from core.metrics import SearchMonitor
from core.search import SearchEngine
from core.store import CacheStore
from models import ResponseFormat


@pytest.fixture
def catalog(monkeypatch, baker_store):
    """Point the server at the Baker Mayfield catalog."""
    monkeypatch.setattr(boomer_bot_mcp, "video_store", baker_store)
    monkeypatch.setattr(
        boomer_bot_mcp,
        "video_search",
        SearchEngine(baker_store, limit=3, monitor=SearchMonitor()),
    )
    return baker_store


class TestSearchVideosTool:
    @pytest.mark.asyncio
    async def test_markdown_embeds_matches(self, catalog):
        text = await boomer_bot_mcp.search_videos("baker")

        assert "**Baker Mayfield Heisman Run**" in text
        assert "https://www.youtube.com/embed/bkr123" in text
        assert "https://www.youtube.com/embed/tx456" in text
        assert text.index("Heisman") < text.index("Texas Game")

    @pytest.mark.asyncio
    async def test_json_format(self, catalog):
        text = await boomer_bot_mcp.search_videos("texas", ResponseFormat.JSON)
        data = json.loads(text)

        assert data["count"] == 1
        assert data["videos"][0]["title"] == "Texas Game Highlights"
        assert data["videos"][0]["video_id"] == "tx456"

    @pytest.mark.asyncio
    async def test_blank_query(self, catalog):
        data = json.loads(await boomer_bot_mcp.search_videos("   ", ResponseFormat.JSON))

        assert data["count"] == 0

    @pytest.mark.asyncio
    async def test_registered_with_query_argument(self):
        tools = {tool.name: tool for tool in await boomer_bot_mcp.mcp.list_tools()}

        assert "search_videos" in tools
        assert "query" in tools["search_videos"].inputSchema["properties"]
        assert tools["search_videos"].annotations.readOnlyHint is True

    @pytest.mark.asyncio
    async def test_unknown_tool_is_structured_error(self):
        with pytest.raises(ToolError, match="Unknown tool: get_weather"):
            await boomer_bot_mcp.mcp.call_tool("get_weather", {"query": "rain"})


class TestCacheTools:
    @pytest.mark.asyncio
    async def test_cache_status(self, catalog):
        data = json.loads(await boomer_bot_mcp.get_cache_status())

        assert data["videos"] == 2
        assert data["snapshot_version"] == 1
        assert len(data["fingerprint"]) == 64
        assert data["refresh_running"] is False

    @pytest.mark.asyncio
    async def test_performance_metrics(self):
        report = await boomer_bot_mcp.get_performance_metrics()

        assert "## Catalog Refresh" in report


class TestSportsTools:
    @pytest.mark.asyncio
    async def test_score_uses_default_team(self):
        games = [
            {
                "id": "1",
                "date": "",
                "home": "Oklahoma Sooners",
                "home_score": "28",
                "away": "Auburn Tigers",
                "away_score": "21",
                "status": "Final",
            }
        ]
        with patch.object(
            boomer_bot_mcp.espn, "get_scoreboard_games", AsyncMock(return_value=games)
        ):
            text = await boomer_bot_mcp.get_score("  ")

        assert text == "Auburn Tigers 21, Oklahoma Sooners 28 - Final"

    @pytest.mark.asyncio
    async def test_cfbd_without_data(self):
        with patch.object(
            boomer_bot_mcp.cfbd, "get_recruiting", AsyncMock(return_value=[])
        ) as mock_recruiting:
            text = await boomer_bot_mcp.get_recruiting("Oklahoma", 2025)

        assert text == "No recruiting data found."
        mock_recruiting.assert_awaited_once_with("Oklahoma", 2025)

    @pytest.mark.asyncio
    async def test_play_by_play_requires_game_id(self):
        assert (
            await boomer_bot_mcp.get_play_by_play()
            == "Game ID required for play-by-play data."
        )

    @pytest.mark.asyncio
    async def test_year_defaults_to_current(self):
        with patch.object(
            boomer_bot_mcp.cfbd, "get_team_stats", AsyncMock(return_value=[])
        ) as mock_stats:
            await boomer_bot_mcp.get_team_stats()

        team, year = mock_stats.await_args.args
        assert team == "Oklahoma"
        assert year >= 2025


class TestHealthRoutes:
    def test_health(self):
        client = TestClient(boomer_bot_mcp.mcp.streamable_http_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.text == "OK"

    def test_status_reports_video_count(self, catalog):
        client = TestClient(boomer_bot_mcp.mcp.streamable_http_app())

        data = client.get("/").json()

        assert data["status"] == "ok"
        assert data["videos"] == 2
        assert data["tools"] == 20

    def test_status_with_empty_cache(self, monkeypatch):
        monkeypatch.setattr(boomer_bot_mcp, "video_store", CacheStore())
        client = TestClient(boomer_bot_mcp.mcp.streamable_http_app())

        data = client.get("/").json()

        assert data["videos"] == 0
        assert data["last_updated"] is None


class TestStartupChecks:
    def test_warns_without_cfbd_key(self, monkeypatch, caplog):
        monkeypatch.delenv("CFBD_API_KEY", raising=False)

        with caplog.at_level(logging.WARNING, logger="boomer_bot_mcp"):
            boomer_bot_mcp.validate_environment()

        assert "CFBD_API_KEY not set" in caplog.text

    def test_quiet_with_cfbd_key(self, monkeypatch, caplog):
        monkeypatch.setenv("CFBD_API_KEY", "test_key")

        with caplog.at_level(logging.WARNING, logger="boomer_bot_mcp"):
            boomer_bot_mcp.validate_environment()

        assert "CFBD_API_KEY" not in caplog.text
