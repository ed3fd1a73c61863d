"""Tests for core/metrics.py."""

from core.errors import FetchError
from core.metrics import RefreshMetrics, SearchMonitor, format_metrics_report


class TestSearchMonitor:
    def test_average_from_running_totals(self):
        monitor = SearchMonitor()

        monitor.record_search(0.002, 3)
        monitor.record_search(0.004, 1)

        assert monitor.total_searches == 2
        assert monitor.total_results == 4
        assert round(monitor.avg_search_time_ms, 3) == 3.0

    def test_state_does_not_grow_with_searches(self):
        monitor = SearchMonitor()

        for _ in range(10_000):
            monitor.record_search(0.001, 1)

        assert monitor.total_searches == 10_000
        assert all(
            not isinstance(value, (list, dict)) for value in vars(monitor).values()
        )

    def test_empty_monitor(self):
        summary = SearchMonitor().summary()

        assert summary["total_searches"] == 0
        assert summary["avg_search_time_ms"] == 0.0


class TestRefreshMetrics:
    def test_failures_by_type(self):
        metrics = RefreshMetrics()

        metrics.record_update()
        metrics.record_failure(FetchError("https://example.com", "timeout"))

        assert metrics.attempts == 2
        assert metrics.error_types == {"FetchError": 1}
        assert metrics.success_rate == 50.0

    def test_report_sections(self):
        searches = SearchMonitor()
        searches.record_search(0.001, 2)

        report = format_metrics_report(RefreshMetrics(), searches)

        assert "## Video Search" in report
        assert "- Total Searches: 1" in report
        assert "## Catalog Refresh" in report
