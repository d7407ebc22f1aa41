"""Tests for CollectionMetrics."""

import logging

from feedroute.metrics.collector import CollectionMetrics, MetricsSummary, get_metrics, reset_metrics


class TestCollectionMetrics:
    """Tests for counting and events."""

    def test_record_items(self):
        metrics = CollectionMetrics()
        metrics.record_items("gov", count=10)
        metrics.record_items("gov", count=2)
        metrics.record_items("stats")

        summary = metrics.summary()
        assert summary.total_items == 13
        assert summary.items_by_route == {"gov": 12, "stats": 1}

    def test_record_error_returns_event(self):
        metrics = CollectionMetrics()

        event = metrics.record_error("zaixs", "FetchError", key="https://www.zaixs.com/thread-1-1-1.html", message="HTTP 404")

        assert event.route == "zaixs"
        assert event.message == "HTTP 404"
        assert metrics.events == [event]

    def test_record_error_logs_structured_warning(self, caplog):
        metrics = CollectionMetrics()

        with caplog.at_level(logging.WARNING, logger="feedroute.metrics.collector"):
            metrics.record_error("7kid", "ContentDecodeError", key="1")

        record = caplog.records[0]
        assert record.route == "7kid"
        assert record.error_type == "ContentDecodeError"

    def test_events_bounded(self):
        metrics = CollectionMetrics(max_events=2)
        for i in range(3):
            metrics.record_error("gov", "FetchError", key=str(i))

        assert [e.key for e in metrics.events] == ["1", "2"]
        assert metrics.summary().total_errors == 3

    def test_time_operation(self):
        metrics = CollectionMetrics()

        with metrics.time_operation("run", "gov"):
            pass

        times = metrics.summary().operation_times
        assert "gov" in times["run"]
        assert times["run"]["gov"] >= 0

    def test_reset(self):
        metrics = CollectionMetrics()
        metrics.record_items("gov")
        metrics.record_error("gov", "FetchError")

        metrics.reset()

        assert metrics.summary().total_items == 0
        assert metrics.events == []

    def test_to_dict(self):
        metrics = CollectionMetrics()
        metrics.record_items("gov", 3)

        assert metrics.to_dict()["items_by_route"] == {"gov": 3}


class TestMetricsSummary:
    def test_str_lists_each_route(self):
        summary = MetricsSummary(
            total_items=1200,
            total_errors=2,
            items_by_route={"gov": 1200},
            errors_by_route={"zaixs": 2},
            errors_by_type={"FetchError": 2},
        )

        lines = str(summary).splitlines()

        assert lines[0] == "1,200 items, 2 failed"
        assert "  gov: 1,200 items, 0 failed" in lines
        assert "  zaixs: 0 items, 2 failed" in lines
        assert lines[-1] == "  by type: FetchError=2"


def test_global_metrics_singleton():
    metrics = get_metrics()
    metrics.record_items("gov")

    assert get_metrics() is metrics

    reset_metrics()
    assert get_metrics().summary().total_items == 0
