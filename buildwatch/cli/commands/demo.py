"""``buildwatch demo`` — replay a synthetic concurrent build.

Builds a small fake dependency set: some library units are already
cached, the rest are built in parallel, one worker thread per unit, and
the root unit is built last.  Every event goes through a
``CompositeReporter`` holding a ``ConsoleReporter`` and a
``RecordingReporter``, exactly as a build engine would drive them.
"""

from __future__ import annotations

import hashlib
import logging
import time
from concurrent.futures import ThreadPoolExecutor

import typer
from rich.console import Console

from buildwatch.config import config
from buildwatch.models.units import BuildStatus, Package
from buildwatch.observability import configure_logging
from buildwatch.reporting import Reporter
from buildwatch.reporting.composite import CompositeReporter
from buildwatch.reporting.console import ConsoleReporter
from buildwatch.reporting.recording import RecordingReporter

console = Console()
logger = logging.getLogger(__name__)

DEMO_COMPONENT = "demo"


class DemoBuildError(RuntimeError):
    """Raised for units the demo was told to fail."""


def _make_package(name: str) -> Package:
    digest = hashlib.sha256(f"{DEMO_COMPONENT}:{name}".encode()).hexdigest()[:12]
    return Package(name=name, component=DEMO_COMPONENT, version_id=digest)


def _build_unit(
    reporter: Reporter, unit: Package, lines: int, delay: float, fail: bool
) -> BaseException | None:
    """Emit the unit-scoped events for one unit, as a build worker would."""
    reporter.unit_build_started(unit)
    for step in range(1, lines + 1):
        reporter.unit_build_log(unit, False, f"step {step}/{lines}\n".encode())
        time.sleep(delay)

    error: BaseException | None = None
    if fail:
        reporter.unit_build_log(unit, True, b"error: synthetic failure\n")
        error = DemoBuildError(f"{unit.full_name} was told to fail")
    reporter.unit_build_finished(unit, error)
    return error


def demo_cmd(
    units: int = typer.Option(4, "--units", "-n", min=1, help="Number of library units."),
    cached: int = typer.Option(1, "--cached", min=0, help="How many libraries are already cached."),
    lines: int = typer.Option(3, "--lines", min=0, help="Log lines each unit produces."),
    fail: str = typer.Option(None, "--fail", help="Name of a unit to fail, e.g. lib-2."),
    delay: float = typer.Option(
        0.05, "--delay", "-d", min=0.0, help="Delay in seconds between log lines."
    ),
    log_level: str = typer.Option(config.log_level, "--log-level", help="Diagnostic log level."),
) -> None:
    """Replay a synthetic concurrent build through the reporters."""
    configure_logging(log_level)

    libraries = [_make_package(f"lib-{i}") for i in range(units)]
    root = _make_package("app")
    status_by_unit = {
        lib: BuildStatus.BUILT if i < cached else BuildStatus.PENDING
        for i, lib in enumerate(libraries)
    }
    status_by_unit[root] = BuildStatus.PENDING
    pending = [lib for lib in libraries if status_by_unit[lib] is BuildStatus.PENDING]

    recorder = RecordingReporter()
    reporter = CompositeReporter([ConsoleReporter(console=console), recorder])

    reporter.build_started(root, status_by_unit)

    with ThreadPoolExecutor(max_workers=max(len(pending), 1)) as pool:
        futures = [
            pool.submit(_build_unit, reporter, lib, lines, delay, lib.name == fail)
            for lib in pending
        ]
        errors = [err for err in (f.result() for f in futures) if err is not None]

    if not errors:
        root_error = _build_unit(reporter, root, lines, delay, root.name == fail)
        if root_error is not None:
            errors.append(root_error)

    build_error = None
    if errors:
        build_error = DemoBuildError(f"{len(errors)} unit(s) failed to build")
    reporter.build_finished(root, build_error)

    logger.debug("Demo recorded %d events", len(recorder.events))
    console.print(f"[dim]{len(recorder.events)} events reported[/dim]")

    if build_error is not None:
        raise typer.Exit(code=1)
