"""Unit tests for the CLI — Typer command registration and the demo build."""

from __future__ import annotations

import logging

from typer.testing import CliRunner

from buildwatch import __version__
from buildwatch.cli.app import app
from buildwatch.observability import configure_logging

runner = CliRunner()


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "demo" in result.output

    def test_version_command(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_demo_command_exists(self):
        result = runner.invoke(app, ["demo", "--help"])
        assert result.exit_code == 0


class TestDemoCommand:
    def test_successful_demo(self):
        result = runner.invoke(app, ["demo", "--units", "3", "--cached", "1", "--delay", "0"])
        assert result.exit_code == 0, result.output
        assert "cached" in result.output
        assert "[demo:lib-1] build started" in result.output
        assert "[demo:app] package build succeeded" in result.output
        assert "build succeeded" in result.output
        assert "events reported" in result.output

    def test_failing_unit_fails_build(self):
        result = runner.invoke(
            app, ["demo", "--units", "3", "--cached", "0", "--delay", "0", "--fail", "lib-2"]
        )
        assert result.exit_code == 1
        assert "[demo:lib-2] package build failed" in result.output
        assert "build failed" in result.output
        # the root is never built once a dependency failed
        assert "[demo:app] build started" not in result.output


class TestConfigureLogging:
    def test_installs_single_handler(self):
        configure_logging("DEBUG")
        configure_logging("INFO")
        package_logger = logging.getLogger("buildwatch")
        named = [h for h in package_logger.handlers if h.get_name() == "buildwatch"]
        assert len(named) == 1
        assert package_logger.level == logging.INFO
