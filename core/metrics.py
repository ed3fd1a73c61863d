"""
Refresh and search metrics.

Track how the catalog refresh loop is doing and how search is being used.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional

__all__ = [
    "RefreshMetrics",
    "SearchMonitor",
    "get_refresh_metrics",
    "get_search_monitor",
    "format_metrics_report",
]

# ══════════════════════════════════════════════════════════════════════════════
# Metrics Classes
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class RefreshMetrics:
    """Track catalog refresh cycles."""

    attempts: int = 0
    updates: int = 0
    unchanged: int = 0
    failures: int = 0
    error_types: dict[str, int] = field(default_factory=dict)
    last_success_at: Optional[float] = None
    last_failure_at: Optional[float] = None
    last_error: Optional[str] = None

    @property
    def success_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return ((self.updates + self.unchanged) / self.attempts) * 100

    def record_update(self):
        self.attempts += 1
        self.updates += 1
        self.last_success_at = time.time()

    def record_unchanged(self):
        self.attempts += 1
        self.unchanged += 1
        self.last_success_at = time.time()

    def record_failure(self, error: BaseException):
        error_type = type(error).__name__
        self.attempts += 1
        self.failures += 1
        self.error_types[error_type] = self.error_types.get(error_type, 0) + 1
        self.last_failure_at = time.time()
        self.last_error = str(error)

    def summary(self) -> dict[str, Any]:
        return {
            "attempts": self.attempts,
            "updates": self.updates,
            "unchanged": self.unchanged,
            "failures": self.failures,
            "success_rate": round(self.success_rate, 1),
            "last_error": self.last_error,
        }


@dataclass
class SearchMonitor:
    """Track video search usage."""

    start_time: float = field(default_factory=time.time)
    total_searches: int = 0
    total_search_time: float = 0.0
    empty_queries: int = 0
    total_results: int = 0

    def record_search(self, duration_seconds: float, result_count: int = 0):
        self.total_searches += 1
        self.total_search_time += duration_seconds
        self.total_results += result_count

    def record_empty_query(self):
        self.empty_queries += 1

    @property
    def avg_search_time_ms(self) -> float:
        if not self.total_searches:
            return 0.0
        return (self.total_search_time / self.total_searches) * 1000

    @property
    def uptime_seconds(self) -> float:
        return time.time() - self.start_time

    def summary(self) -> dict[str, Any]:
        return {
            "uptime_seconds": round(self.uptime_seconds, 1),
            "total_searches": self.total_searches,
            "empty_queries": self.empty_queries,
            "avg_search_time_ms": round(self.avg_search_time_ms, 2),
            "total_results": self.total_results,
        }


# ══════════════════════════════════════════════════════════════════════════════
# Global Instances
# ══════════════════════════════════════════════════════════════════════════════

_refresh_metrics = RefreshMetrics()
_search_monitor = SearchMonitor()


def get_refresh_metrics() -> RefreshMetrics:
    return _refresh_metrics


def get_search_monitor() -> SearchMonitor:
    return _search_monitor


def format_metrics_report(
    refresh: Optional[RefreshMetrics] = None,
    searches: Optional[SearchMonitor] = None,
) -> str:
    """Generate human-readable metrics report."""
    refresh = refresh or _refresh_metrics
    searches = searches or _search_monitor

    lines = [
        "# Performance Metrics",
        "",
        "## Video Search",
        f"- Uptime: {searches.uptime_seconds:.0f}s",
        f"- Total Searches: {searches.total_searches}",
        f"- Empty Queries: {searches.empty_queries}",
        f"- Avg Search Time: {searches.avg_search_time_ms:.2f}ms",
        "",
        "## Catalog Refresh",
        f"- Success Rate: {refresh.success_rate:.1f}%",
        f"- Attempts: {refresh.attempts}",
        f"- Updates: {refresh.updates}",
        f"- Unchanged: {refresh.unchanged}",
        f"- Failed: {refresh.failures}",
    ]

    if refresh.error_types:
        lines.append("")
        lines.append("## Errors")
        for err, count in sorted(refresh.error_types.items(), key=lambda x: -x[1]):
            lines.append(f"- {err}: {count}")

    return "\n".join(lines)
