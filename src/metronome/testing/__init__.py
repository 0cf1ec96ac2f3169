"""Public test-support utilities for metronome.

Re-exports test doubles and factories so that consumer test suites
can import everything from a single ``metronome.testing`` namespace
instead of reaching into private modules.

Provided symbols:

- :class:`FakeClock`: manually advanced clock for timing tests.
- :func:`make_settings`: factory for ``Settings`` without ``.env`` files.
"""

from metronome.testing._clock import FakeClock
from metronome.testing._settings import make_settings

__all__ = [
    "FakeClock",
    "make_settings",
]
