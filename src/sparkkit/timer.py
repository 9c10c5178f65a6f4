"""
Named wall-clock timers.

Each timer records one start mark and one stop mark; the first mark of each
kind wins. Totals are in seconds. A timer that was never started totals to
zero rather than raising, which makes missing start() calls easy to spot in
reports.
"""

from __future__ import annotations

import contextlib as _contextlib
import dataclasses as _dataclasses
import time as _time
import typing as _typing

DEFAULT_TIMER = "_default"


@_dataclasses.dataclass(slots=True)
class _Marks:
    start: float | None = None
    stop: float | None = None
    total: float | None = None


class Timer:
    """
    Collection of named timers.

    Example:
        >>> timer = Timer()
        >>> with timer.measure("render"):
        ...     render_page()
        >>> timer.get_total("render", precision=3)
        0.012
    """

    def __init__(self, clock: _typing.Callable[[], float] = _time.perf_counter) -> None:
        self._clock = clock
        self._timers: dict[str, _Marks] = {}

    def start(self, name: str = DEFAULT_TIMER) -> None:
        marks = self._timers.setdefault(name, _Marks())
        if marks.start is None:
            marks.start = self._clock()

    def stop(self, name: str = DEFAULT_TIMER) -> None:
        marks = self._timers.setdefault(name, _Marks())
        if marks.stop is None:
            marks.stop = self._clock()

    def total(self, name: str = DEFAULT_TIMER) -> None:
        """
        Compute and record the total for a timer.

        A running timer is stopped first. A timer that was never started
        is recorded with zero start, stop and total.
        """
        if not self.started(name):
            self._timers[name] = _Marks(start=0.0, stop=0.0, total=0.0)
            return

        self.stop(name)
        marks = self._timers[name]
        assert marks.start is not None and marks.stop is not None
        marks.total = marks.stop - marks.start

    def get_total(self, name: str = DEFAULT_TIMER, precision: int | None = None) -> float:
        """
        Get the total for a timer, totaling it first if needed.

        Args:
            name: Timer name.
            precision: Number of decimal places to round to. None = no rounding.

        Returns:
            Elapsed seconds.
        """
        if not self.totaled(name):
            self.total(name)
        total = self._timers[name].total
        assert total is not None
        return round(total, precision) if precision is not None else total

    def get_totals(self, precision: int | None = None) -> dict[str, float]:
        """Total every known timer and return name → seconds."""
        return {name: self.get_total(name, precision) for name in list(self._timers)}

    def started(self, name: str) -> bool:
        marks = self._timers.get(name)
        return marks is not None and marks.start is not None

    def stopped(self, name: str) -> bool:
        marks = self._timers.get(name)
        return marks is not None and marks.stop is not None

    def totaled(self, name: str) -> bool:
        marks = self._timers.get(name)
        return marks is not None and marks.total is not None

    @_contextlib.contextmanager
    def measure(self, name: str = DEFAULT_TIMER) -> _typing.Iterator[None]:
        """Start a timer on entry and stop it on exit (also on error)."""
        self.start(name)
        try:
            yield
        finally:
            self.stop(name)

    def format_totals(self, precision: int = 6) -> str:
        """Render every timer as a `name: seconds` line."""
        lines = [f"{name}: {total}" for name, total in self.get_totals(precision).items()]
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format_totals()
