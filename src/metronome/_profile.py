"""Scoped profiler feeding measured durations into a statistics sink.

:class:`Profile` ties a :class:`~metronome._timer.Timer` to an
:class:`~metronome._stat.Accumulator`.  When the profile is released,
the elapsed time is recorded as one event.  Release is deterministic:
it happens when the ``with`` block exits or when :meth:`Profile.close`
is called, never on garbage collection.

Usage::

    stat = Stat()
    with Profile(clock, stat):
        subroutine()

    @profiled(clock, stat)
    def subroutine() -> None: ...

Profiles over the same sink compose by successive ``accumulate``
calls.  The sink has no locking, so overlapping profiles on different
threads must not share one.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from types import TracebackType
from typing import ParamSpec, TypeVar

from metronome._clock import ClockPort
from metronome._stat import Accumulator
from metronome._timer import Timer

P = ParamSpec("P")
R = TypeVar("R")


class Profile:
    """Accumulate the lifetime of this object into *sink*.

    The timer starts in the constructor, not in ``__enter__``.

    Args:
        clock: Clock for the internal timer.
        sink: Receives exactly one duration on release.
    """

    __slots__ = ("_closed", "_sink", "_timer")

    def __init__(self, clock: ClockPort, sink: Accumulator) -> None:
        self._sink = sink
        self._timer = Timer(clock)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Record the elapsed time into the sink.

        Only the first call records; later calls do nothing.
        """
        if self._closed:
            return
        self._closed = True
        self._sink.accumulate(self._timer.elapsed())

    def __enter__(self) -> Profile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


def profiled(clock: ClockPort, sink: Accumulator) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorate a function so each call is profiled into *sink*."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with Profile(clock, sink):
                return func(*args, **kwargs)

        return wrapper

    return decorator
