"""Monotonic clock port and system adapter.

Provides ClockPort (Protocol) and SystemClock for measuring elapsed time.

**Why monotonic?** ``time.perf_counter()`` is immune to NTP adjustments
and manual system-clock changes, making it suitable for measuring
elapsed durations. The epoch is arbitrary, only *differences* between
``now()`` calls are meaningful (PEP 418).

Every :class:`~metronome._timer.Timer` and :class:`~metronome._heart.Heart`
keeps a reference to the clock it was created with.  The clock must
outlive all of them; this is a caller contract and is not checked.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from metronome._sec import Sec


@runtime_checkable
class ClockPort(Protocol):
    """Monotonic clock for timing measurements.

    Used by timers, profilers and the heart to measure elapsed time
    without being affected by system clock adjustments.

    The default implementation wraps ``time.perf_counter()``. Tests
    inject a deterministic fake clock for reproducible timing.
    """

    def now(self) -> Sec:
        """Return the current monotonic reading.

        Returns:
            Seconds from an arbitrary epoch.  Successive calls on one
            instance never decrease.
        """
        ...


class SystemClock:
    """Production clock wrapping ``time.perf_counter()``.

    Readings start near zero at construction, which keeps the float
    mantissa small for long-running loops.

    Satisfies :class:`ClockPort` via structural subtyping, no
    base-class inheritance required (PEP 544).

    Usage::

        clock = SystemClock()
        start = clock.now()
        # ... some work ...
        elapsed = clock.now() - start
    """

    def __init__(self) -> None:
        self._epoch = time.perf_counter()

    def now(self) -> Sec:
        """Return seconds since this clock was created."""
        return Sec(time.perf_counter() - self._epoch)
