"""Fixed-timestep loop engine.

The :class:`Heart` updates an application state at a fixed tick rate and
renders it as often as the :class:`RenderLimit` allows.  Updates and
renders are decoupled: the tick rate can be much lower than the frame
rate.  Smooth output comes from interpolating the previous and current
tick when rendering; the fraction of a tick that has passed since the
last update is the *remainder*.

One iteration of the loop is a *beat*:

1. **Drain**: while at least one tick of time is pending, deep-copy the
   state as *previous*, run ``update`` and consume exactly one tick
   from the iteration timer.  After a stall several updates run in the
   same beat, so the simulation never depends on rendering speed.
2. **Render**: if the render limit allows it, blend
   ``previous * (1 - remainder) + current * remainder`` and hand it to
   the renderer.
3. **Housekeeping**: once per second, run the ``sec`` hook and refresh
   the tick and frame statistics.

Example::

    heart = Heart(100.0, SystemClock())  # 100 ticks per second
    heart.start(MyState, MyRenderer)     # creates both from defaults

See Also:
    :mod:`metronome._state` for the state and renderer protocols.
"""

from __future__ import annotations

import copy
import enum
import logging
import math

from metronome._clock import ClockPort
from metronome._errors import HeartAlreadyRunningError
from metronome._profile import Profile
from metronome._sec import Sec
from metronome._stat import Stat
from metronome._state import Renderer, State
from metronome._timer import Timer

logger = logging.getLogger(__name__)


class RenderLimit(enum.Enum):
    """Rendering limitations."""

    NEVER = "never"
    """0 FPS."""
    ONCE = "once"
    """At most one frame per statistics cycle (1 FPS)."""
    ALWAYS = "always"
    """Unlimited FPS."""

    def allows(self, rate: int) -> bool:
        """Decide whether to render given the frames drawn this cycle."""
        if self is RenderLimit.NEVER:
            return False
        if self is RenderLimit.ONCE:
            return rate == 0
        return True


class HeartState(enum.Enum):
    """Lifecycle of a heart.  A heart runs at most once."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class Heart:
    """Heart of a real-time application.

    Args:
        tick_rate: Target updates per second (Hz).  Must be positive
            and finite.
        clock: Time source shared by every timer the heart creates.
            It must outlive the heart.

    Raises:
        ValueError: If *tick_rate* is not a positive finite number.
    """

    def __init__(self, tick_rate: float, clock: ClockPort) -> None:
        if not math.isfinite(tick_rate) or tick_rate <= 0.0:
            msg = f"tick_rate must be a positive finite number, got {tick_rate!r}"
            raise ValueError(msg)
        self._tick_rate = float(tick_rate)
        self._target = Sec(1.0 / tick_rate)
        self._clock = clock
        self._running = False
        self._state = HeartState.IDLE
        self._render_limit = RenderLimit.ALWAYS
        self._ticks = Stat()
        self._frames = Stat()

    # -- accessors ----------------------------------------------------------

    @property
    def ticks(self) -> Stat:
        """Update statistics."""
        return self._ticks

    @property
    def frames(self) -> Stat:
        """Render statistics."""
        return self._frames

    @property
    def clock(self) -> ClockPort:
        """Time source shared by every timer the heart creates."""
        return self._clock

    @property
    def tick_rate(self) -> float:
        """Target updates per second (Hz)."""
        return self._tick_rate

    @property
    def target(self) -> Sec:
        """Duration of one tick."""
        return self._target

    @property
    def render_limit(self) -> RenderLimit:
        """Current rendering limit."""
        return self._render_limit

    @property
    def state(self) -> HeartState:
        """Lifecycle stage: idle, running or stopped."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the running flag is set.

        Turns ``False`` as soon as :meth:`stop` is called, while
        :attr:`state` stays ``RUNNING`` until the loop has exited.
        """
        return self._running

    # -- control ------------------------------------------------------------

    def set_render_limit(self, limit: RenderLimit) -> None:
        """Set the rendering limit.

        Consider disabling or limiting rendering during an intense
        task.  Better still, split the task into chunks done on
        consecutive updates; otherwise pending ticks pile up and are
        all drained at once when the task is done.  Whether splitting
        is possible depends on whether the task must run alongside
        the real-time behaviour: loading a map can span many updates,
        a collision pass belongs in one.
        """
        if limit is not self._render_limit:
            logger.debug("Render limit %s -> %s", self._render_limit.name, limit.name)
        self._render_limit = limit

    def stop(self) -> None:
        """Flag the heart to stop.

        The beat in flight is completed: when called from ``update``,
        the remaining pending ticks are still drained and the heart may
        render once and run ``sec`` once before the loop exits.
        Calling it on an idle heart does nothing.
        """
        self._running = False

    def start(self, state_type: type[State], renderer_type: type[Renderer]) -> None:
        """Run the loop until :meth:`stop` is called.

        Creates the renderer and the state from their defaults, calls
        ``state.init`` and then beats until stopped.  Blocks the calling
        thread for the whole run.

        An exception raised by a hook ends the run: the heart is
        marked stopped and the exception propagates.

        Raises:
            HeartAlreadyRunningError: If the heart is running or has
                already run.  This is a programming error.
        """
        if self._state is not HeartState.IDLE:
            msg = f"Heart cannot start: already {self._state.value}"
            logger.critical(msg)
            raise HeartAlreadyRunningError(msg)
        self._state = HeartState.RUNNING
        self._running = True
        logger.info("Heart started at %.6g Hz (tick %s)", self._tick_rate, self._target)

        try:
            init = Timer(self._clock)
            renderer = renderer_type()
            current = state_type()
            current.init(self, init)
            self._beat(state_type, current, renderer)
        except Exception:
            logger.exception("Heart stopped by an error in the application")
            raise
        finally:
            self._running = False
            self._state = HeartState.STOPPED
            logger.info(
                "Heart stopped after %d ticks and %d frames",
                self._ticks.count,
                self._frames.count,
                extra={"ticks": self._ticks.count, "frames": self._frames.count},
            )

    # -- loop ---------------------------------------------------------------

    def _beat(self, state_type: type[State], current: State, renderer: Renderer) -> None:
        previous = state_type()
        second = Timer(self._clock)
        iteration = Timer(self._clock)

        while self._running:
            while iteration >= self._target:
                previous = copy.deepcopy(current)
                with Profile(self._clock, self._ticks):
                    current.update(self)
                iteration.advance_by(self._target)

            if self._render_limit.allows(self._frames.rate):
                with Profile(self._clock, self._frames):
                    remainder = float(iteration.elapsed()) / float(self._target)
                    drawn = previous * (1.0 - remainder) + current * remainder
                    renderer.render(self, drawn)

            if second >= Sec.ONE:
                second.advance_by(Sec.ONE)
                current.sec(self)
                logger.debug(
                    "Tick rate %d/s, frame rate %d/s",
                    self._ticks.rate,
                    self._frames.rate,
                    extra=self._trace(),
                )
                self._ticks.refresh()
                self._frames.refresh()

    def _trace(self) -> dict[str, float | int | None]:
        """Statistics of the cycle that is ending, as log record extras.

        Durations are averages over the whole run in seconds, ``None``
        before the first event.
        """
        tick_duration = self._ticks.average_duration()
        frame_duration = self._frames.average_duration()
        return {
            "tick_rate": self._ticks.rate,
            "frame_rate": self._frames.rate,
            "tick_duration": None if tick_duration.isnan() else float(tick_duration),
            "frame_duration": None if frame_duration.isnan() else float(frame_duration),
        }
