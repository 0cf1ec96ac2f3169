"""Rolling time statistics of a repeated code region.

A :class:`Stat` collects one duration per *event* (one call of the
region) and groups events into *cycles*, separated by
:meth:`Stat.refresh`.  Refreshing once per second turns
:attr:`Stat.rate` into an events-per-second counter, which is how the
heart derives its tick rate and frame rate.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

from metronome._sec import Sec


@runtime_checkable
class Accumulator(Protocol):
    """Sink for measured durations, fed by :class:`~metronome._profile.Profile`."""

    def accumulate(self, duration: Sec) -> None:
        """Record one event that took *duration*."""
        ...


class Stat:
    """Time statistics of a subroutine.

    Example::

        stat = Stat()
        stat.accumulate(Sec(3.0))   # subroutine took 3 s
        assert stat.rate == 1

        stat.refresh()              # a new cycle starts
        stat.accumulate(Sec(5.0))   # subroutine took 5 s

        assert stat.average_duration() == Sec(4.0)
        assert stat.count == 2
        assert stat.rate == 1
        assert stat.cycles == 2
    """

    __slots__ = ("_count", "_cycles", "_rate", "_total")

    def __init__(self) -> None:
        self._total = Sec.ZERO
        self._count = 0
        self._rate = 0
        self._cycles = 1

    @property
    def total(self) -> Sec:
        """Sum of all recorded durations."""
        return self._total

    @property
    def count(self) -> int:
        """Number of events over the lifetime of the statistics."""
        return self._count

    @property
    def rate(self) -> int:
        """Number of events in the current cycle."""
        return self._rate

    @property
    def cycles(self) -> int:
        """Number of cycles so far, including the current one."""
        return self._cycles

    def accumulate(self, duration: Sec) -> None:
        """Record one event that took *duration*."""
        self._total = self._total + duration
        self._count += 1
        self._rate += 1

    def __iadd__(self, duration: object) -> Stat:
        if not isinstance(duration, Sec):
            return NotImplemented
        self.accumulate(duration)
        return self

    def refresh(self) -> None:
        """End the current cycle and start the next one.

        The lifetime total and count are kept.
        """
        self._rate = 0
        self._cycles += 1

    def reset(self) -> None:
        """Forget everything, as if freshly created."""
        self._total = Sec.ZERO
        self._count = 0
        self._rate = 0
        self._cycles = 1

    def average_duration(self) -> Sec:
        """Return the mean duration of one event.

        Returns ``Sec(nan)`` when nothing was recorded yet.  Check it
        with :meth:`Sec.isnan`.
        """
        if self._count == 0:
            return Sec(math.nan)
        return self._total / self._count

    def average_rate(self) -> float:
        """Return the mean number of events per cycle."""
        return self._count / self._cycles

    def __repr__(self) -> str:
        return (
            f"Stat(total={self._total!r}, count={self._count}, "
            f"rate={self._rate}, cycles={self._cycles})"
        )
