"""Shared test fixtures for buildwatch."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

import pytest
from rich.console import Console

from buildwatch.config import ReporterSettings
from buildwatch.models.units import Package
from buildwatch.reporting.console import ConsoleReporter
from buildwatch.reporting.formatting import TerminalRenderer


@pytest.fixture
def settings() -> ReporterSettings:
    """Provide settings with library defaults, ignoring the environment."""
    return ReporterSettings(_env_file=None)


@pytest.fixture
def console() -> Console:
    """Provide a plain-text console writing into a StringIO buffer."""
    return Console(
        file=io.StringIO(),
        color_system=None,
        force_terminal=False,
        width=200,
    )


@pytest.fixture
def renderer(settings: ReporterSettings) -> TerminalRenderer:
    return TerminalRenderer(settings)


@pytest.fixture
def reporter(console: Console, settings: ReporterSettings) -> ConsoleReporter:
    """Provide a ConsoleReporter wired to the in-memory console."""
    return ConsoleReporter(console, settings=settings)


@pytest.fixture
def output(console: Console) -> Callable[[], str]:
    """Return a callable reading everything written to the console so far."""

    def _read() -> str:
        return console.file.getvalue()

    return _read


@pytest.fixture
def output_lines(output: Callable[[], str]) -> Callable[[], list[str]]:
    """Return a callable giving the non-blank output lines, right-stripped."""

    def _read() -> list[str]:
        return [line.rstrip() for line in output().splitlines() if line.strip()]

    return _read


# ---------------------------------------------------------------------------
# Unit factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_package() -> Callable[..., Package]:
    """Factory fixture: build a Package with sensible defaults."""

    def _factory(name: str = "app", version_id: str | None = "1.0.0", **overrides: Any) -> Package:
        return Package(name=name, version_id=version_id, **overrides)

    return _factory
