"""Pytest configuration and shared fixtures."""

import pytest

# The metronome testing plugin is registered via a ``pytest11`` entry
# point (pyproject.toml) for external consumers.  In our own test
# suite we disable it (``-p no:metronome``) and load explicitly here
# instead, so the metronome import chain happens after ``pytest-cov``
# starts tracing.
pytest_plugins = ["metronome.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (run against the system clock)"
    )
