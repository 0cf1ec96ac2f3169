"""Stopwatch measuring time since a reference point.

A :class:`Timer` remembers one reading of its clock and reports how much
time has passed since.  The reference can be pushed forward with
:meth:`Timer.advance_by`, which lets a loop "consume" a fixed step of
elapsed time without reading the clock again and without accumulating
drift.
"""

from __future__ import annotations

from metronome._clock import ClockPort
from metronome._sec import Sec


class Timer:
    """Elapsed time relative to the moment of creation.

    Comparison operators compare :meth:`elapsed` with a :class:`Sec`,
    so waiting loops read naturally::

        timer = Timer(clock)
        while timer < 5 * Sec.MILLI:
            ...

    The timer borrows *clock* for its whole lifetime.

    Args:
        clock: Source of monotonic readings.
    """

    __slots__ = ("_clock", "_start")

    def __init__(self, clock: ClockPort) -> None:
        self._clock = clock
        self._start = clock.now()

    @property
    def clock(self) -> ClockPort:
        return self._clock

    @property
    def start(self) -> Sec:
        """The current reference reading."""
        return self._start

    def elapsed(self) -> Sec:
        """Return the time passed since the reference point.

        Reads the clock on every call; the result is never cached.
        """
        return self._clock.now() - self._start

    def advance_by(self, duration: Sec) -> Timer:
        """Move the reference point forward by *duration*.

        Reduces :meth:`elapsed` by exactly *duration* without reading
        the clock.

        Returns:
            The timer itself, for chaining.
        """
        self._start = self._start + duration
        return self

    def __iadd__(self, duration: object) -> Timer:
        if not isinstance(duration, Sec):
            return NotImplemented
        return self.advance_by(duration)

    def __sub__(self, other: object) -> Sec:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() - other

    def __rsub__(self, other: object) -> Sec:
        if not isinstance(other, Sec):
            return NotImplemented
        return other - self.elapsed()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() == other

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() != other

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() < other

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() <= other

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() > other

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Sec):
            return NotImplemented
        return self.elapsed() >= other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Timer(start={self._start!r})"

    def __str__(self) -> str:
        return str(self.elapsed())
