"""Application configuration via pydantic-settings.

Configuration is loaded from environment variables and/or ``.env``
files.  Nested models use ``__`` as the delimiter in env var names,
e.g. ``HEART__TICK_RATE=120``.

The schema covers three concerns:

* **Heart**: target tick rate and initial render limit.
* **Logging**: level, format, optional file sink, rotation.
* **Demo**: parameters of the bundled progress-bar demo.

Applications embedding the heart subclass :class:`Settings` and add
their own ``env_prefix`` plus any application-specific fields.

All durations are in **seconds**, all rates in **hertz**.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings, nested via composition)
# -------------------------------------------------------------------


class HeartSettings(BaseModel):
    """Loop engine configuration.

    Environment variables (with ``__`` nesting)::

        HEART__TICK_RATE=120
        HEART__RENDER_LIMIT=once
    """

    tick_rate: Annotated[float, Field(gt=0, allow_inf_nan=False)] = Field(
        default=60.0,
        description="Target updates per second (Hz).",
    )
    render_limit: Literal["never", "once", "always"] = Field(
        default="always",
        description=(
            "Initial rendering limit. "
            "'never' disables rendering, "
            "'once' renders at most one frame per second, "
            "'always' renders on every beat."
        ),
    )


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    The ``format`` field selects the output format:

    - ``"json"`` (default): structured JSON lines for log
      aggregators.  Each line is a complete JSON object with
      correlation metadata.
    - ``"text"``: human-readable timestamped format for local
      development and direct terminal use.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="json",
        description=(
            "Log output format. "
            "'json' emits structured JSON lines; "
            "'text' emits human-readable timestamped "
            "lines for development."
        ),
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description=(
            "Maximum log file size in megabytes before rotation. "
            "Only applies when ``file`` is set."
        ),
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


class DemoSettings(BaseModel):
    """Progress-bar demo configuration.

    Environment variables::

        DEMO__STEP=0.05
        DEMO__WIDTH=40
    """

    step: Annotated[float, Field(gt=0, le=1)] = Field(
        default=0.01,
        description="Progress added on every tick, as a fraction of the bar.",
    )
    width: Annotated[int, Field(ge=1)] = Field(
        default=50,
        description="Bar width in characters.",
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for metronome applications.

    Loaded from environment variables with the nested delimiter
    ``__`` and an optional ``.env`` file in the working directory.

    Example ``.env``::

        HEART__TICK_RATE=100
        HEART__RENDER_LIMIT=always
        LOGGING__LEVEL=DEBUG
        LOGGING__FORMAT=text

    Example with an application prefix (subclass)::

        class MyAppSettings(Settings):
            model_config = SettingsConfigDict(
                env_prefix="MYAPP_",
                env_nested_delimiter="__",
                env_file=".env",
                env_file_encoding="utf-8",
            )
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    """``extra="ignore"`` because the base class sets no ``env_prefix``
    and would otherwise reject unrelated variables (``PATH`` etc.)."""

    heart: HeartSettings = Field(
        default_factory=HeartSettings,
        description="Loop engine settings.",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
    demo: DemoSettings = Field(
        default_factory=DemoSettings,
        description="Progress-bar demo settings.",
    )
