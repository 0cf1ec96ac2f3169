"""Unit tests for metronome._settings — configuration models.

Test Techniques Used:
    - Specification-based Testing: Default values and field
      constraints
    - Boundary Value Analysis: Tick rate, step and width limits
    - Environment Override: monkeypatch for env var injection
    - Validation Error: pydantic constraint violations
"""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from metronome._settings import (
    DemoSettings,
    HeartSettings,
    LoggingSettings,
    Settings,
)


class TestHeartSettings:
    """Defaults and constraints of HeartSettings.

    Technique: Specification-based Testing, Boundary Value Analysis.
    """

    def test_tick_rate_defaults_to_60(self) -> None:
        """Default tick rate is 60 Hz."""
        assert HeartSettings().tick_rate == 60.0

    def test_render_limit_defaults_to_always(self) -> None:
        """Rendering is unlimited by default."""
        assert HeartSettings().render_limit == "always"

    @pytest.mark.parametrize("rate", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_tick_rate(self, rate: float) -> None:
        """Tick rate must be positive and finite."""
        with pytest.raises(ValidationError):
            HeartSettings(tick_rate=rate)

    def test_tiny_tick_rate_is_valid(self) -> None:
        """Any positive rate is accepted, even below 1 Hz."""
        assert HeartSettings(tick_rate=0.5).tick_rate == 0.5

    def test_unknown_render_limit_is_invalid(self) -> None:
        """Only never/once/always are accepted."""
        with pytest.raises(ValidationError):
            HeartSettings(render_limit="sometimes")  # type: ignore[arg-type]


class TestDemoSettings:
    """Defaults and constraints of DemoSettings.

    Technique: Boundary Value Analysis.
    """

    def test_defaults(self) -> None:
        """One percent per tick on a 50 character bar."""
        s = DemoSettings()
        assert s.step == 0.01
        assert s.width == 50

    def test_step_of_one_is_valid(self) -> None:
        """A single tick may fill the bar."""
        assert DemoSettings(step=1.0).step == 1.0

    @pytest.mark.parametrize("step", [0.0, -0.1, 1.01])
    def test_invalid_step(self, step: float) -> None:
        with pytest.raises(ValidationError):
            DemoSettings(step=step)

    def test_width_zero_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            DemoSettings(width=0)


class TestLoggingSettings:
    """Defaults and constraints of LoggingSettings.

    Technique: Specification-based Testing.
    """

    def test_defaults(self) -> None:
        """INFO, JSON, stderr only, 10 MB x 3 rotation."""
        s = LoggingSettings()
        assert s.level == "INFO"
        assert s.format == "json"
        assert s.file is None
        assert s.max_file_size_mb == 10
        assert s.backup_count == 3

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")  # type: ignore[arg-type]

    def test_invalid_format(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")  # type: ignore[arg-type]

    def test_negative_backup_count_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(backup_count=-1)


class TestSettingsFromEnvironment:
    """Root Settings loading.

    Technique: Environment Override.
    """

    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """``__`` separates nested fields."""
        monkeypatch.setenv("HEART__TICK_RATE", "120")
        monkeypatch.setenv("HEART__RENDER_LIMIT", "once")
        monkeypatch.setenv("LOGGING__LEVEL", "DEBUG")
        monkeypatch.setenv("DEMO__WIDTH", "20")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.heart.tick_rate == 120.0
        assert s.heart.render_limit == "once"
        assert s.logging.level == "DEBUG"
        assert s.demo.width == 20

    def test_unrelated_env_vars_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """extra='ignore' tolerates foreign variables."""
        monkeypatch.setenv("SOMETHING_ELSE", "1")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.heart.tick_rate > 0

    def test_invalid_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Constraint violations from the environment raise."""
        monkeypatch.setenv("HEART__TICK_RATE", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_dotenv_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:  # noqa: ANN001
        """A .env file is read when given."""
        monkeypatch.delenv("HEART__TICK_RATE", raising=False)
        monkeypatch.delenv("LOGGING__FORMAT", raising=False)
        env = tmp_path / ".env"
        env.write_text("HEART__TICK_RATE=30\nLOGGING__FORMAT=text\n")

        s = Settings(_env_file=str(env))  # type: ignore[call-arg]

        assert s.heart.tick_rate == 30.0
        assert s.logging.format == "text"
