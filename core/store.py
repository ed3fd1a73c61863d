"""
Video cache store.

Holds the single current snapshot of the video catalog. Snapshots are
immutable; a refresh builds a complete new one and swaps the reference,
so readers always see either the old or the new catalog in full.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional

from models import VideoRecord

__all__ = [
    "CacheSnapshot",
    "CacheStore",
    "ReplaceOutcome",
    "compute_fingerprint",
]

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Snapshot
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class CacheSnapshot:
    """Point-in-time copy of the catalog plus its source fingerprint."""

    records: tuple[VideoRecord, ...] = ()
    fingerprint: Optional[str] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    def __len__(self) -> int:
        return len(self.records)


class ReplaceOutcome(str, Enum):
    """Result of a replace_if_changed call."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"


def compute_fingerprint(raw_bytes: bytes) -> str:
    """SHA-256 hex digest of the raw source document."""
    return hashlib.sha256(raw_bytes).hexdigest()


# ══════════════════════════════════════════════════════════════════════════════
# Store
# ══════════════════════════════════════════════════════════════════════════════


class CacheStore:
    """
    Owner of the current CacheSnapshot.

    ``replace_if_changed`` is the only mutator. Everything else is a
    read of the current reference and never blocks.
    """

    def __init__(self):
        self._snapshot = CacheSnapshot()

    def current(self) -> CacheSnapshot:
        return self._snapshot

    def records(self) -> tuple[VideoRecord, ...]:
        return self._snapshot.records

    def record_count(self) -> int:
        """Number of cached videos, for health checks."""
        return len(self._snapshot.records)

    def replace_if_changed(
        self, raw_bytes: bytes, parsed_records: Iterable[VideoRecord]
    ) -> ReplaceOutcome:
        """
        Swap in a new snapshot unless the source bytes are unchanged.

        Args:
            raw_bytes: The document exactly as fetched
            parsed_records: Records parsed from ``raw_bytes``

        Returns:
            ReplaceOutcome.UNCHANGED when the fingerprint matches the
            current snapshot, ReplaceOutcome.UPDATED otherwise
        """
        fingerprint = compute_fingerprint(raw_bytes)
        previous = self._snapshot

        if fingerprint == previous.fingerprint:
            return ReplaceOutcome.UNCHANGED

        snapshot = CacheSnapshot(
            records=tuple(parsed_records),
            fingerprint=fingerprint,
            updated_at=datetime.now(timezone.utc),
            version=previous.version + 1,
        )
        # Single reference assignment; the new snapshot is complete here.
        self._snapshot = snapshot

        logger.debug(
            f"Snapshot v{snapshot.version}: {len(snapshot)} videos "
            f"(fingerprint {fingerprint[:12]})"
        )
        return ReplaceOutcome.UPDATED
