"""Exception hierarchy for metronome.

Two kinds of failure exist:

- **Recoverable input errors**: :class:`SecParseError` is raised when
  text cannot be parsed into a :class:`~metronome._sec.Sec`.  It is a
  :class:`ValueError` so generic parsing code keeps working.
- **Contract violations**: :class:`HeartAlreadyRunningError` signals a
  logic error in the embedding application (starting a heart that is
  not idle).  Correct callers never catch it; it is meant to abort the
  program with a diagnostic.

Invalid constructor arguments raise plain :class:`ValueError`.
"""

from __future__ import annotations


class MetronomeError(Exception):
    """Base class for all metronome exceptions."""


class SecParseError(MetronomeError, ValueError):
    """Text could not be parsed as a duration in seconds.

    Args:
        text: The rejected input.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Cannot parse {text!r} as seconds")


class HeartAlreadyRunningError(MetronomeError, RuntimeError):
    """A heart was started while running or after it stopped.

    A heart runs exactly once.  Create a new instance instead of
    restarting a spent one.
    """
