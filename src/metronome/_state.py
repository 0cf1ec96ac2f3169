"""Capability protocols for applications driven by the heart.

An application supplies two classes:

- a **state**, advanced in fixed steps by ``update`` and blended for
  rendering with ``+`` and ``*``;
- a **renderer**, which draws blended states.

Both are created by :meth:`~metronome._heart.Heart.start` with no
arguments, so they need usable defaults.

The heart snapshots the state with :func:`copy.deepcopy` before each
update, so lists or arrays changed in place by ``update`` keep their
previous values in the snapshot.  States holding handles that cannot
be copied (files, sockets) should implement ``__deepcopy__``.

For interpolation to make sense, ``state * 0.0 + state * 1.0`` must
equal ``state`` and the blend ``previous * (1 - r) + current * r``
must be meaningful for ``r`` in ``[0, 1)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from metronome._heart import Heart
    from metronome._timer import Timer

L = TypeVar("L", bound="Linear")


@runtime_checkable
class Linear(Protocol):
    """A value that can be superposed and scaled."""

    def __add__(self: L, other: L) -> L: ...

    def __mul__(self: L, factor: float) -> L: ...


@runtime_checkable
class State(Linear, Protocol):
    """State of an application the heart runs."""

    def init(self, heart: Heart, timer: Timer) -> None:
        """Initialize the state once, before the first beat.

        *timer* started right before the state was created, so the hook
        can report its own initialization cost.  The heart is mutable
        here, e.g. to pick a render limit before the loop starts.
        """
        ...

    def update(self, heart: Heart) -> None:
        """Advance the state by one fixed tick."""
        ...

    def sec(self, heart: Heart) -> None:
        """Profile the state once per second."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Renderer of an application the heart runs."""

    def render(self, heart: Heart, state: State) -> None:
        """Draw an interpolated snapshot of the state."""
        ...
