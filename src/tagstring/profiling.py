"""Opt-in build timing for tagstring.

attributed() times its own tokenize and build work and reports it to the
accumulator active in the current context. Time spent by the caller between
calls is not counted. Nothing is timed while no accumulator is active.

Example:
    from tagstring import attributed
    from tagstring.profiling import profiled_build

    with profiled_build() as stats:
        for markup in strings:
            attributed(markup, ATTRIBUTES)

    print(stats.summary())
    # {"total_ms": 0.42, "build_calls": 120, "failed_calls": 1, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class BuildAccumulator:
    """Totals over the attributed() calls made inside profiled_build().

    Attributes:
        build_calls: Calls that returned styled text.
        failed_calls: Calls that raised a TagStringError.
        source_length: Characters of source processed, failed calls included.
        run_count: Runs produced by successful calls.
        build_seconds: Time spent inside attributed(), failed calls included.
        slowest_seconds: Longest single call.

    """

    build_calls: int = 0
    failed_calls: int = 0
    source_length: int = 0
    run_count: int = 0
    build_seconds: float = 0.0
    slowest_seconds: float = 0.0

    def record_build(self, source_length: int, run_count: int, elapsed: float) -> None:
        """Record a call that produced styled text."""
        self.build_calls += 1
        self.run_count += run_count
        self._add(source_length, elapsed)

    def record_failure(self, source_length: int, elapsed: float) -> None:
        """Record a call rejected as invalid markup."""
        self.failed_calls += 1
        self._add(source_length, elapsed)

    def _add(self, source_length: int, elapsed: float) -> None:
        self.source_length += source_length
        self.build_seconds += elapsed
        self.slowest_seconds = max(self.slowest_seconds, elapsed)

    @property
    def total_ms(self) -> float:
        """Time spent building, in milliseconds."""
        return self.build_seconds * 1000

    def summary(self) -> dict[str, Any]:
        """Totals as a plain dict, times rounded to microseconds."""
        return {
            "total_ms": round(self.total_ms, 3),
            "slowest_ms": round(self.slowest_seconds * 1000, 3),
            "build_calls": self.build_calls,
            "failed_calls": self.failed_calls,
            "source_length": self.source_length,
            "run_count": self.run_count,
        }


_accumulator: ContextVar[BuildAccumulator | None] = ContextVar(
    "build_accumulator",
    default=None,
)


def get_build_accumulator() -> BuildAccumulator | None:
    """Accumulator for the current context, or None when not profiling."""
    return _accumulator.get()


@contextmanager
def profiled_build() -> Iterator[BuildAccumulator]:
    """Collect build timings for attributed() calls in the block.

    Nested blocks each get a fresh accumulator; the outer one resumes when
    the inner block exits.
    """
    acc = BuildAccumulator()
    token = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = ["BuildAccumulator", "get_build_accumulator", "profiled_build"]
