"""
Core of the Boomer Bot MCP video catalog.

    Cache Store        Immutable snapshots of videos.json, swapped atomically
    Refresh Scheduler  Periodic re-fetch with fingerprint change detection
    Search Engine      Case-insensitive substring search over the snapshot
    Circuit Breaker    Back off from failing sports data APIs
    Metrics            Refresh and search counters
"""

from core.errors import CatalogError, FetchError, ParseError
from core.metrics import (
    RefreshMetrics,
    SearchMonitor,
    format_metrics_report,
    get_refresh_metrics,
    get_search_monitor,
)
from core.refresh import RefreshScheduler, fetch_source, make_fetcher, parse_records
from core.reliability import CircuitBreaker, CircuitState, get_circuit_breaker
from core.search import SEARCHABLE_FIELDS, SearchEngine, record_matches
from core.store import CacheSnapshot, CacheStore, ReplaceOutcome, compute_fingerprint

__all__ = [
    # Store
    "CacheSnapshot",
    "CacheStore",
    "ReplaceOutcome",
    "compute_fingerprint",
    # Refresh
    "RefreshScheduler",
    "fetch_source",
    "make_fetcher",
    "parse_records",
    # Search
    "SEARCHABLE_FIELDS",
    "SearchEngine",
    "record_matches",
    # Errors
    "CatalogError",
    "FetchError",
    "ParseError",
    # Reliability
    "CircuitBreaker",
    "CircuitState",
    "get_circuit_breaker",
    # Metrics
    "RefreshMetrics",
    "SearchMonitor",
    "get_refresh_metrics",
    "get_search_monitor",
    "format_metrics_report",
]
