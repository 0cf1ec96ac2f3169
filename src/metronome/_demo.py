"""Progress-bar demo application.

A :class:`Progress` state fills up by a fixed step on every tick and
stops the heart when full; a :class:`Bar` renderer draws the
interpolated progress as a text bar, printing a line only when the bar
changes.  Run it with the ``metronome`` command.

Both classes are created by the heart without arguments, so their
parameters live in class attributes.  :func:`build_demo` derives
configured subclasses from :class:`~metronome._settings.DemoSettings`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import ClassVar

import typer

from metronome._heart import Heart
from metronome._settings import DemoSettings
from metronome._timer import Timer

logger = logging.getLogger(__name__)


@dataclass
class Progress:
    """Fraction of the work done, in ``[0, 1]``."""

    value: float = 0.0

    step: ClassVar[float] = 0.01

    def __add__(self, other: Progress) -> Progress:
        return Progress(self.value + other.value)

    def __mul__(self, factor: float) -> Progress:
        return Progress(self.value * factor)

    def init(self, heart: Heart, timer: Timer) -> None:
        logger.info("Initialization done in %s", timer)

    def update(self, heart: Heart) -> None:
        self.value += self.step
        if self.value >= 1.0:
            heart.stop()

    def sec(self, heart: Heart) -> None:
        logger.info(
            "Tick rate: %.1f Frame rate: %.1f",
            heart.ticks.average_rate(),
            heart.frames.average_rate(),
        )


class Bar:
    """Text progress bar, e.g. ``[=====>    ] 50%``."""

    width: ClassVar[int] = 50

    def __init__(self) -> None:
        self.previous: int | None = None

    def draw(self, value: float) -> str:
        """Return the bar line for *value* without printing it."""
        length = min(max(math.floor(self.width * value), 0), self.width)
        percent = min(max(math.floor(value * 100.0), 0), 100)
        bar = "=" * length
        if length != self.width:
            bar += ">" + " " * (self.width - length - 1)
        return f"[{bar}] {percent}%"

    def render(self, heart: Heart, state: Progress) -> None:
        length = min(max(math.floor(self.width * state.value), 0), self.width)
        if length == self.previous:
            return
        self.previous = length
        typer.echo(self.draw(state.value))


def build_demo(settings: DemoSettings) -> tuple[type[Progress], type[Bar]]:
    """Return state and renderer classes configured by *settings*."""
    state_type = type("Progress", (Progress,), {"step": settings.step})
    renderer_type = type("Bar", (Bar,), {"width": settings.width})
    return state_type, renderer_type
