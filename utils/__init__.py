"""
Utility functions for response caching and small data helpers.

All utilities are stateless apart from the in-memory response cache.
"""

import hashlib
import json
import logging
import time
import urllib.parse
from typing import Any, Optional

__all__ = [
    # Cache
    "get_cache_key",
    "get_cached_result",
    "set_cached_result",
    "clear_cache",
    "CACHE_TTL_SECONDS",
    # Helpers
    "normalize_query",
    "extract_youtube_id",
]

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Cache Configuration
# ══════════════════════════════════════════════════════════════════════════════

CACHE_TTL_SECONDS = 60  # scores change quickly

_cache: dict[str, dict[str, Any]] = {}

# ══════════════════════════════════════════════════════════════════════════════
# Cache Functions
# ══════════════════════════════════════════════════════════════════════════════


def get_cache_key(source: str, endpoint: str, **params) -> str:
    """Generate cache key from upstream name, endpoint and parameters."""
    param_str = json.dumps(params, sort_keys=True, default=str)
    return hashlib.md5(f"{source}:{endpoint}:{param_str}".encode()).hexdigest()


def get_cached_result(key: str) -> Optional[Any]:
    """Retrieve cached upstream response if not expired."""
    if key in _cache:
        entry = _cache[key]
        if time.time() - entry["ts"] < CACHE_TTL_SECONDS:
            return entry["data"]
        del _cache[key]
    return None


def set_cached_result(key: str, result: Any) -> None:
    """Store upstream response in cache, dropping expired entries."""
    now = time.time()
    expired = [
        k for k, entry in _cache.items() if now - entry["ts"] >= CACHE_TTL_SECONDS
    ]
    for k in expired:
        del _cache[k]
    _cache[key] = {"data": result, "ts": now}


def clear_cache() -> int:
    """Clear all cached responses, returning how many were dropped."""
    dropped = len(_cache)
    _cache.clear()
    logger.debug(f"Response cache cleared ({dropped} entries)")
    return dropped


# ══════════════════════════════════════════════════════════════════════════════
# Helper Functions
# ══════════════════════════════════════════════════════════════════════════════


def normalize_query(query: str) -> str:
    """Normalize query whitespace."""
    return " ".join(query.split()).strip()


def extract_youtube_id(url: str) -> str:
    """
    Pull the video id out of a YouTube URL.

    Handles ``watch?v=<id>``, ``youtu.be/<id>`` and ``/embed/<id>`` forms.
    Returns an empty string for anything else.
    """
    if not url:
        return ""

    parsed = urllib.parse.urlparse(url.strip())
    host = (parsed.hostname or "").lower()

    video_ids = urllib.parse.parse_qs(parsed.query).get("v")
    if video_ids:
        return video_ids[0]

    path = parsed.path.strip("/")
    if host.endswith("youtu.be") and path:
        return path.split("/")[0]
    if path.startswith(("embed/", "shorts/")):
        return path.split("/")[1]

    return ""
