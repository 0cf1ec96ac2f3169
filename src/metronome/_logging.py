"""Log formatting and root logger setup.

With the ``json`` format every record becomes one JSON object per line.
Records from the heart carry its statistics as extras (see
:data:`TRACE_FIELDS`), which the formatter lifts to top-level keys: the
DEBUG line written once per second holds the tick and frame rates and
the average update and render durations, and the INFO line written on
stop holds the tick and frame totals.  Filtering a run's log on
``tick_rate`` therefore yields its performance trace, one point per
second.

The ``text`` format is a plain timestamped layout for terminals; it
drops the extras.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

from metronome._settings import LoggingSettings

TRACE_FIELDS: tuple[str, ...] = (
    "tick_rate",
    "frame_rate",
    "tick_duration",
    "frame_duration",
    "ticks",
    "frames",
)
"""Record extras copied into JSON output when present."""

_ONE_MB = 1024 * 1024

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Keys always present: ``timestamp`` (UTC, ISO 8601), ``level``,
    ``logger``, ``message`` and ``service``.  ``version`` is added when
    set, trace fields when the record carries them, and ``exception``
    when a traceback is attached.

    Args:
        service: Name written to every line.
        version: Build version; left out when empty.
    """

    def __init__(self, *, service: str = "", version: str = "") -> None:
        super().__init__()
        self._service = service
        self._version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self._service,
        }
        if self._version:
            entry["version"] = self._version

        for name in TRACE_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        # json.dumps escapes newlines in tracebacks: one record, one line.
        return json.dumps(entry, default=str)


def _formatter(settings: LoggingSettings, service: str, version: str) -> logging.Formatter:
    if settings.format == "json":
        return JsonFormatter(service=service, version=version)
    return logging.Formatter(_TEXT_FORMAT)


def _handlers(settings: LoggingSettings) -> list[logging.Handler]:
    # stdout belongs to the renderer, logs go to stderr.
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file is not None:
        handlers.append(
            RotatingFileHandler(
                settings.file,
                maxBytes=settings.max_file_size_mb * _ONE_MB,
                backupCount=settings.backup_count,
            )
        )
    return handlers


def configure_logging(
    settings: LoggingSettings,
    *,
    service: str,
    version: str = "",
) -> None:
    """Replace the root logger's handlers according to *settings*.

    Installs a stderr handler and, when ``settings.file`` is set, a
    size-rotated file handler.  Both share one formatter.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter = _formatter(settings, service, version)
    for handler in _handlers(settings):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(settings.level)
