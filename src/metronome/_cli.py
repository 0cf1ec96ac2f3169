"""Command-line entry point (Typer-based).

Provides :func:`build_cli`, which constructs a Typer app that loads
:class:`~metronome._settings.Settings`, applies command-line overrides
(``--tick-rate``, ``--render-limit``, ``--step``, ``--width``,
``--log-level``, ``--log-format``, ``--env-file``) and runs the
progress-bar demo on a :class:`~metronome._heart.Heart` driven by the
system clock.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from typing import Annotated, Any, get_args

import typer
from pydantic import BaseModel, ValidationError

from metronome import __version__
from metronome._clock import SystemClock
from metronome._demo import build_demo
from metronome._heart import Heart, RenderLimit
from metronome._logging import configure_logging
from metronome._settings import LoggingSettings, Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 3

SERVICE_NAME = "metronome"

# ---------------------------------------------------------------------------
# Allowed values (extracted from LoggingSettings Literal types)
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)


def _override(model: BaseModel, **updates: Any) -> Any:
    """Return a validated copy of *model* with non-``None`` *updates* applied."""
    changes = {key: value for key, value in updates.items() if value is not None}
    if not changes:
        return model
    return type(model).model_validate({**model.model_dump(), **changes})


def run(settings: Settings) -> None:
    """Run the progress-bar demo until it completes."""
    heart = Heart(settings.heart.tick_rate, SystemClock())
    heart.set_render_limit(RenderLimit(settings.heart.render_limit))
    state_type, renderer_type = build_demo(settings.demo)
    heart.start(state_type, renderer_type)


def build_cli() -> typer.Typer:
    """Construct the ``metronome`` Typer CLI.

    Returns:
        A configured :class:`typer.Typer` ready to invoke.
    """
    cli = typer.Typer(
        help=(
            f"{SERVICE_NAME} v{__version__}: fixed-timestep loop engine "
            "(runs the progress-bar demo)"
        ),
    )

    @cli.callback(invoke_without_command=True)
    def main(
        version_flag: Annotated[
            bool | None,
            typer.Option(
                "--version",
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = None,
        tick_rate: Annotated[
            float | None,
            typer.Option("--tick-rate", help="Override target tick rate (Hz)."),
        ] = None,
        render_limit: Annotated[
            str | None,
            typer.Option("--render-limit", help="Override render limit."),
        ] = None,
        step: Annotated[
            float | None,
            typer.Option("--step", help="Progress added per tick (0-1]."),
        ] = None,
        width: Annotated[
            int | None,
            typer.Option("--width", help="Bar width in characters."),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        # -- version ---------------------------------------------------------
        if version_flag:
            typer.echo(f"{SERVICE_NAME} v{__version__}")
            raise typer.Exit()

        # -- validate enum-like options -------------------------------------
        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )

        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        valid_limits = [limit.value for limit in RenderLimit]
        if render_limit is not None and render_limit.lower() not in valid_limits:
            raise typer.BadParameter(
                f"Invalid render limit '{render_limit}'. "
                f"Choose from: {', '.join(valid_limits)}",
                param_hint="'--render-limit'",
            )

        # -- build settings and apply CLI overrides -------------------------
        try:
            settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
            settings.heart = _override(
                settings.heart,
                tick_rate=tick_rate,
                render_limit=render_limit.lower() if render_limit else None,
            )
            settings.demo = _override(settings.demo, step=step, width=width)
            settings.logging = _override(
                settings.logging,
                level=log_level.upper() if log_level else None,
                format=log_format.lower() if log_format else None,
            )
        except ValidationError as exc:
            logger.error("Configuration error: %s", exc)
            raise SystemExit(EXIT_CONFIG_ERROR) from exc

        configure_logging(settings.logging, service=SERVICE_NAME, version=__version__)

        # -- run the loop ---------------------------------------------------
        try:
            with contextlib.suppress(KeyboardInterrupt):
                run(settings)
        except Exception as exc:
            logger.error("Runtime error: %s", exc)
            sys.exit(EXIT_RUNTIME_ERROR)

    return cli


def main() -> None:
    """Console-script entry point."""
    build_cli()()
