"""Tests for opt-in build timing."""

import time

import pytest

from tagstring import UnclosedTagError, attributed, attributed_or_none
from tagstring.profiling import BuildAccumulator, get_build_accumulator, profiled_build


class TestProfiledBuild:
    """profiled_build() context manager."""

    def test_disabled_by_default(self) -> None:
        assert get_build_accumulator() is None

    def test_records_successful_builds(self) -> None:
        with profiled_build() as stats:
            attributed("Hello <b>World</b>", {"b": {"weight": "bold"}})
            attributed("plain", {})
        summary = stats.summary()
        assert summary["build_calls"] == 2
        assert summary["failed_calls"] == 0
        assert summary["source_length"] == len("Hello <b>World</b>") + len("plain")
        assert summary["run_count"] == 3
        assert summary["total_ms"] >= 0

    def test_failed_builds_are_counted(self) -> None:
        with profiled_build() as stats:
            with pytest.raises(UnclosedTagError):
                attributed("<b>", {})
            assert attributed_or_none("</i>", {}) is None
        assert stats.build_calls == 0
        assert stats.failed_calls == 2
        assert stats.source_length == len("<b>") + len("</i>")
        assert stats.run_count == 0

    def test_time_outside_builds_is_not_counted(self) -> None:
        with profiled_build() as stats:
            time.sleep(0.05)
            attributed("x", {})
            time.sleep(0.05)
        assert stats.build_calls == 1
        assert stats.total_ms < 50

    def test_accumulator_reset_after_block(self) -> None:
        with profiled_build() as stats:
            assert get_build_accumulator() is stats
        assert get_build_accumulator() is None

    def test_nested_blocks_are_separate(self) -> None:
        with profiled_build() as outer:
            attributed("a", {})
            with profiled_build() as inner:
                attributed("b", {})
            assert get_build_accumulator() is outer
        assert (outer.build_calls, inner.build_calls) == (1, 1)


class TestBuildAccumulator:
    """Accumulator arithmetic."""

    def test_record_build(self) -> None:
        acc = BuildAccumulator()
        acc.record_build(source_length=10, run_count=2, elapsed=0.002)
        acc.record_build(source_length=5, run_count=1, elapsed=0.001)
        assert (acc.build_calls, acc.source_length, acc.run_count) == (2, 15, 3)
        assert acc.total_ms == pytest.approx(3.0)
        assert acc.slowest_seconds == pytest.approx(0.002)

    def test_record_failure(self) -> None:
        acc = BuildAccumulator()
        acc.record_failure(source_length=4, elapsed=0.5)
        assert acc.failed_calls == 1
        assert acc.build_calls == 0
        assert acc.summary()["total_ms"] == pytest.approx(500.0)
        assert acc.summary()["slowest_ms"] == pytest.approx(500.0)
