"""Tests for metronome._cli — the command-line entry point.

Test Techniques Used:
    - Specification-based Testing: CLI flag parsing and defaults
    - State-based Testing: Verifying settings propagation
    - Error Condition Testing: Invalid flag values, config errors
    - Behavioural Testing: Exit codes and output text
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from metronome import __version__
from metronome._cli import EXIT_CONFIG_ERROR, EXIT_OK, EXIT_RUNTIME_ERROR, build_cli
from metronome._settings import Settings

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def runner() -> CliRunner:
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def env_file(tmp_path: Path) -> str:
    """Path to a .env file that does not exist."""
    return str(tmp_path / "missing.env")


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[MagicMock]:
    """Keep configure_logging from replacing the root handlers."""
    with patch("metronome._cli.configure_logging") as mock:
        yield mock


@pytest.fixture
def mock_run() -> Iterator[MagicMock]:
    """Replace the demo runner."""
    with patch("metronome._cli.run") as mock:
        yield mock


def invoked_settings(mock_run: MagicMock) -> Settings:
    mock_run.assert_called_once()
    return mock_run.call_args.args[0]


# ---------------------------------------------------------------------------
# Version and help
# ---------------------------------------------------------------------------


class TestVersionFlag:
    """--version flag tests.

    Technique: Specification-based Testing.
    """

    def test_version_prints_name_and_version(
        self, runner: CliRunner, mock_run: MagicMock
    ) -> None:
        """--version prints 'metronome v{version}' and exits 0."""
        result = runner.invoke(build_cli(), ["--version"])

        assert result.exit_code == EXIT_OK
        assert f"metronome v{__version__}" in result.output
        mock_run.assert_not_called()

    def test_help_lists_options(self, runner: CliRunner) -> None:
        """--help documents the overrides."""
        result = runner.invoke(build_cli(), ["--help"])

        assert result.exit_code == EXIT_OK
        for option in ("--tick-rate", "--render-limit", "--log-level", "--env-file"):
            assert option in result.output


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


class TestOverrides:
    """CLI options override settings.

    Technique: State-based Testing.
    """

    def test_defaults_without_options(
        self, runner: CliRunner, mock_run: MagicMock, env_file: str
    ) -> None:
        """Without options the settings keep their defaults."""
        result = runner.invoke(build_cli(), ["--env-file", env_file])

        assert result.exit_code == EXIT_OK
        settings = invoked_settings(mock_run)
        assert settings.heart.tick_rate == 60.0
        assert settings.heart.render_limit == "always"

    def test_all_overrides_applied(
        self, runner: CliRunner, mock_run: MagicMock, env_file: str
    ) -> None:
        """Every option lands in its settings field."""
        args = [
            "--env-file", env_file,
            "--tick-rate", "120",
            "--render-limit", "ONCE",
            "--step", "0.5",
            "--width", "10",
            "--log-level", "debug",
            "--log-format", "TEXT",
        ]  # fmt: skip
        result = runner.invoke(build_cli(), args)

        assert result.exit_code == EXIT_OK
        settings = invoked_settings(mock_run)
        assert settings.heart.tick_rate == 120.0
        assert settings.heart.render_limit == "once"
        assert settings.demo.step == 0.5
        assert settings.demo.width == 10
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "text"

    def test_env_file_is_read(
        self, runner: CliRunner, mock_run: MagicMock, tmp_path: Path
    ) -> None:
        """Values from --env-file are loaded."""
        env = tmp_path / "app.env"
        env.write_text("HEART__TICK_RATE=25\n")

        result = runner.invoke(build_cli(), ["--env-file", str(env)])

        assert result.exit_code == EXIT_OK
        assert invoked_settings(mock_run).heart.tick_rate == 25.0

    def test_logging_configured_from_settings(
        self,
        runner: CliRunner,
        mock_run: MagicMock,
        env_file: str,
        _no_logging_setup: MagicMock,
    ) -> None:
        """Logging is set up before the loop runs."""
        runner.invoke(build_cli(), ["--env-file", env_file, "--log-format", "text"])

        _no_logging_setup.assert_called_once()
        logging_settings = _no_logging_setup.call_args.args[0]
        assert logging_settings.format == "text"
        assert _no_logging_setup.call_args.kwargs["service"] == "metronome"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    """Invalid input and runtime failures.

    Technique: Error Condition Testing.
    """

    @pytest.mark.parametrize(
        "args",
        [
            ["--log-level", "LOUD"],
            ["--log-format", "xml"],
            ["--render-limit", "sometimes"],
        ],
    )
    def test_invalid_choice_is_usage_error(
        self, runner: CliRunner, mock_run: MagicMock, args: list[str]
    ) -> None:
        """Unknown enum values exit with a usage error."""
        result = runner.invoke(build_cli(), args)

        assert result.exit_code == 2
        mock_run.assert_not_called()

    @pytest.mark.parametrize(
        "args",
        [
            ["--tick-rate", "0"],
            ["--tick-rate=-5"],
            ["--step", "1.5"],
            ["--width", "0"],
        ],
    )
    def test_invalid_value_is_config_error(
        self, runner: CliRunner, mock_run: MagicMock, env_file: str, args: list[str]
    ) -> None:
        """Values failing validation exit with the config error code."""
        result = runner.invoke(build_cli(), ["--env-file", env_file, *args])

        assert result.exit_code == EXIT_CONFIG_ERROR
        mock_run.assert_not_called()

    def test_runtime_error_exit_code(
        self, runner: CliRunner, mock_run: MagicMock, env_file: str
    ) -> None:
        """An exception from the loop exits with the runtime error code."""
        mock_run.side_effect = RuntimeError("boom")

        result = runner.invoke(build_cli(), ["--env-file", env_file])

        assert result.exit_code == EXIT_RUNTIME_ERROR


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


class TestDemoRun:
    """The real demo on the system clock.

    Technique: Behavioural Testing.
    """

    def test_demo_draws_bar(self, runner: CliRunner, env_file: str) -> None:
        """A fast, coarse demo completes and prints the bar."""
        args = ["--env-file", env_file, "--tick-rate", "1000", "--step", "0.5", "--width", "4"]
        result = runner.invoke(build_cli(), args)

        assert result.exit_code == EXIT_OK
        assert "[>   ] 0%" in result.output
