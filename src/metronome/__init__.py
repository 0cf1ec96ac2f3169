"""metronome.

A fixed-timestep real-time loop engine with interpolated rendering and
lightweight profiling primitives.
"""

from importlib.metadata import PackageNotFoundError, version

from metronome._clock import ClockPort, SystemClock
from metronome._errors import HeartAlreadyRunningError, MetronomeError, SecParseError
from metronome._heart import Heart, HeartState, RenderLimit
from metronome._logging import JsonFormatter, configure_logging
from metronome._profile import Profile, profiled
from metronome._sec import Sec
from metronome._settings import DemoSettings, HeartSettings, LoggingSettings, Settings
from metronome._stat import Accumulator, Stat
from metronome._state import Linear, Renderer, State
from metronome._timer import Timer

try:
    # Prefer the generated version file (setuptools_scm at build time)
    from metronome._version import __version__
except ImportError:
    try:
        # Fallback to installed package metadata
        __version__ = version("metronome")
    except PackageNotFoundError:
        # Last resort fallback for editable installs without metadata
        __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Clock
    "ClockPort",
    "SystemClock",
    # Time primitives
    "Sec",
    "Timer",
    # Profiling
    "Accumulator",
    "Profile",
    "Stat",
    "profiled",
    # Heart
    "Heart",
    "HeartState",
    "Linear",
    "RenderLimit",
    "Renderer",
    "State",
    # Errors
    "HeartAlreadyRunningError",
    "MetronomeError",
    "SecParseError",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "DemoSettings",
    "HeartSettings",
    "LoggingSettings",
    "Settings",
]
