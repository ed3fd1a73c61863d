"""Configuration enums and settings for Boomer Bot MCP."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_VIDEOS_URL = "https://raw.githubusercontent.com/myvfc/video-db/main/videos.json"
DEFAULT_REFRESH_INTERVAL_SECONDS = 15 * 60
DEFAULT_SEARCH_LIMIT = 3
DEFAULT_FETCH_TIMEOUT = 30.0

TRANSPORTS = ("streamable-http", "stdio")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"
    JSON = "json"


@dataclass(frozen=True)
class ServerSettings:
    """Runtime settings, resolved once at startup."""

    videos_url: str = DEFAULT_VIDEOS_URL
    refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    search_limit: int = DEFAULT_SEARCH_LIMIT
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    transport: str = "streamable-http"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"


def _positive(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def _log_level(env: Mapping[str, str]) -> str:
    level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL={level!r}, using INFO")
        return "INFO"
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ServerSettings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        ServerSettings with invalid values replaced by defaults
    """
    env = os.environ if environ is None else environ

    transport = env.get("MCP_TRANSPORT", "streamable-http").strip().lower()
    if transport not in TRANSPORTS:
        logger.warning(f"Unknown MCP_TRANSPORT={transport!r}, using streamable-http")
        transport = "streamable-http"

    return ServerSettings(
        videos_url=env.get("VIDEOS_URL") or DEFAULT_VIDEOS_URL,
        refresh_interval_seconds=_positive(
            env,
            "VIDEO_REFRESH_INTERVAL_SECONDS",
            DEFAULT_REFRESH_INTERVAL_SECONDS,
            float,
        ),
        search_limit=_positive(env, "VIDEO_SEARCH_LIMIT", DEFAULT_SEARCH_LIMIT, int),
        fetch_timeout=_positive(
            env, "VIDEO_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT, float
        ),
        transport=transport,
        host=env.get("HOST") or "0.0.0.0",
        port=_positive(env, "PORT", 8080, int),
        log_level=_log_level(env),
    )
