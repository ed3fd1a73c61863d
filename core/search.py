"""
Video search.

Case-insensitive substring matching over a fixed set of record fields,
read from whatever snapshot the CacheStore currently holds.
"""

import logging
import time
from typing import Optional, Sequence

from core.metrics import SearchMonitor, get_search_monitor
from core.store import CacheStore
from models import VideoRecord
from models.config import DEFAULT_SEARCH_LIMIT
from utils import normalize_query

__all__ = [
    "SEARCHABLE_FIELDS",
    "SearchEngine",
    "record_matches",
]

logger = logging.getLogger(__name__)

# Checked in this order; the first hit decides.
SEARCHABLE_FIELDS = ("title", "description", "channel")


def record_matches(record: VideoRecord, needle: str, fields: Sequence[str]) -> bool:
    """True if case-folded ``needle`` is a substring of any listed field."""
    for name in fields:
        if needle in getattr(record, name).casefold():
            return True
    return False


class SearchEngine:
    """Stateless query function over a CacheStore."""

    def __init__(
        self,
        store: CacheStore,
        limit: int = DEFAULT_SEARCH_LIMIT,
        fields: Sequence[str] = SEARCHABLE_FIELDS,
        monitor: Optional[SearchMonitor] = None,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        unknown = set(fields) - set(VideoRecord.model_fields)
        if unknown:
            raise ValueError(f"Unknown searchable fields: {sorted(unknown)}")

        self.store = store
        self.limit = limit
        self.fields = tuple(fields)
        self.monitor = monitor or get_search_monitor()

    def search(self, query: str) -> list[VideoRecord]:
        """
        Find videos whose searchable fields contain ``query``.

        Args:
            query: Free text; blank queries match nothing

        Returns:
            Up to ``limit`` records in catalog order
        """
        needle = normalize_query(query or "").casefold()
        if not needle:
            self.monitor.record_empty_query()
            return []

        started = time.perf_counter()
        # One read of the reference; the whole search runs on this snapshot.
        records = self.store.current().records

        matches: list[VideoRecord] = []
        for record in records:
            if record_matches(record, needle, self.fields):
                matches.append(record)
                if len(matches) >= self.limit:
                    break

        self.monitor.record_search(time.perf_counter() - started, len(matches))
        logger.info(f"Video search {needle!r}: {len(matches)} match(es)")
        return matches
