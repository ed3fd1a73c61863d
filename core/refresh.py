"""
Periodic catalog refresh.

Fetches the videos.json document on a fixed interval and hands it to the
CacheStore, which only swaps snapshots when the content actually changed.
Every failure is logged and the previous snapshot stays in place.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from core.errors import FetchError, ParseError
from core.metrics import RefreshMetrics, get_refresh_metrics
from core.store import CacheStore, ReplaceOutcome
from models import VideoRecord

__all__ = [
    "Fetcher",
    "RefreshScheduler",
    "fetch_source",
    "make_fetcher",
    "parse_records",
]

logger = logging.getLogger(__name__)

API_TIMEOUT = 30.0

Fetcher = Callable[[], Awaitable[bytes]]

# ══════════════════════════════════════════════════════════════════════════════
# Fetch & Parse
# ══════════════════════════════════════════════════════════════════════════════


async def fetch_source(url: str, *, timeout: float = API_TIMEOUT) -> bytes:
    """
    Download the raw source document.

    Raises:
        FetchError: On transport failure or a non-2xx response
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content
    except httpx.HTTPStatusError as e:
        raise FetchError(
            url, f"HTTP {e.response.status_code}", e.response.status_code
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, f"{type(e).__name__}: {e}") from e


def make_fetcher(url: str, *, timeout: float = API_TIMEOUT) -> Fetcher:
    """Bind fetch_source to a URL for use by RefreshScheduler."""

    async def fetcher() -> bytes:
        return await fetch_source(url, timeout=timeout)

    return fetcher


def parse_records(raw: bytes) -> list[VideoRecord]:
    """
    Parse a videos.json document.

    Raises:
        ParseError: If the bytes are not a JSON array of objects
    """
    try:
        data: Any = json.loads(raw)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and the int digit limit.
        raise ParseError(f"not valid JSON ({type(e).__name__}: {e})") from e

    if not isinstance(data, list):
        raise ParseError(f"expected a JSON array, got {type(data).__name__}")

    records = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ParseError(f"item {index} is {type(item).__name__}, not an object")
        try:
            records.append(VideoRecord.model_validate(item))
        except ValidationError as e:
            raise ParseError(f"item {index}: {e.error_count()} invalid field(s)") from e

    return records


# ══════════════════════════════════════════════════════════════════════════════
# Scheduler
# ══════════════════════════════════════════════════════════════════════════════


class RefreshScheduler:
    """
    Keeps a CacheStore fresh.

    ``start()`` loads once before returning, then re-fetches every
    ``interval_seconds`` on a background task until ``stop()``.
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: Fetcher,
        interval_seconds: float,
        metrics: Optional[RefreshMetrics] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.store = store
        self.fetcher = fetcher
        self.interval_seconds = interval_seconds
        self.metrics = metrics or get_refresh_metrics()
        self.cycles = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> Optional[ReplaceOutcome]:
        """
        Run one fetch-parse-replace cycle.

        Returns:
            The store's outcome, or None when the cycle failed and the
            existing snapshot was kept
        """
        try:
            raw = await self.fetcher()
            records = parse_records(raw)
        except (FetchError, ParseError) as e:
            self.metrics.record_failure(e)
            logger.warning(
                f"Video refresh skipped, keeping {self.store.record_count()} "
                f"cached videos: {e}"
            )
            return None
        finally:
            self.cycles += 1

        outcome = self.store.replace_if_changed(raw, records)
        if outcome is ReplaceOutcome.UPDATED:
            self.metrics.record_update()
            logger.info(f"Loaded {len(records)} videos")
        else:
            self.metrics.record_unchanged()
            logger.info("Video catalog unchanged")
        return outcome

    async def start(self) -> None:
        """Load the catalog once, then schedule periodic refreshes."""
        if self.running:
            return
        await self.refresh_once()
        self._task = asyncio.create_task(self._run(), name="video-refresh")
        logger.info(f"Video refresh every {self.interval_seconds:g}s")

    async def stop(self) -> None:
        """Cancel the refresh loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        # wait() never raises for the cancelled task; a cancel aimed at the
        # caller still propagates.
        await asyncio.wait([task])
        logger.info("Video refresh stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.refresh_once()
            except Exception:
                logger.exception("Unexpected error during video refresh")
